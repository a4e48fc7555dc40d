"""Boundary Protocols: contracts between the pure core and the side-effecting shell.

Invariants:
    - Core NEVER imports from infrastructure: dependency arrows point inward only
    - Persistent client state is reached through a KeyValueStorage passed by the caller
    - Implementations provided by infrastructure/ via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with the right methods works
    - Sync methods: header builders are sync, and storage reads are single-key lookups
"""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Persistent string storage keyed by name (the auth token lives here)."""
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Clipboard(Protocol):
    """System clipboard: copy replaces the current content."""
    def copy(self, text: str) -> None: ...
