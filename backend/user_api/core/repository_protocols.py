"""Boundary Protocols — contract between user operations and the key-value store.

Invariants:
    - Operations NEVER import a concrete store — they receive a UserStore
    - Items cross the boundary as plain dicts keyed by attribute name
    - Failures surface as StoreError / ConditionCheckFailedError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-memory test store needs no
      inheritance (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO, the dispatcher bounds them with a timeout
"""

from typing import Protocol


class UserStore(Protocol):
    """Contract for user record persistence keyed by email."""

    async def get(self, email: str) -> dict | None:
        """Strongly-consistent read. None when no item exists."""
        ...

    async def scan(self) -> list[dict]:
        """Every item in the table, in store order."""
        ...

    async def put(self, item: dict, *, if_not_exists: bool = False) -> None:
        """Write item. if_not_exists asserts no item with the key exists."""
        ...

    async def delete(self, email: str, *, if_exists: bool = False) -> None:
        """Delete by key. if_exists asserts the item exists."""
        ...
