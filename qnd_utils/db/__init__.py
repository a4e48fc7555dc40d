"""Database Infrastructure: SQLAlchemy declarative base for the storage tables.

Invariants:
    - Synchronous engine and sessions (storage protocol methods are sync)
"""
