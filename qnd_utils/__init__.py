"""qnd-utils Package: quick helpers for web application code.

Invariants:
    - Package root contains no executable code (no import side effects)

Design Decisions:
    - Empty __init__.py: callers import from the concrete modules
"""
