"""Core Layer: pure helper functions, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from infrastructure/, api/, db/ or models/
    - Functions never mutate the structures passed in
    - Side effects only happen through injected protocol objects (boundary_protocols.py)
"""
