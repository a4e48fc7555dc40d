"""Infrastructure Layer: code that touches storage, HTTP responses, the clipboard or logging.

Invariants:
    - Implements the protocols declared in core/boundary_protocols.py
    - Backend failures are mapped to the core error hierarchy
"""
