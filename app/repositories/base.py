"""
Storage contract every fact store implements.

Implementations own the authoritative collection: they copy facts in on
write and copy them out on read, so callers never share mutable state with
the store.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from app.models.fact import Fact


@runtime_checkable
class FactRepository(Protocol):
    def insert(self, fact: Fact) -> None:
        """Store `fact`, assigning `fact.id` when it is 0.

        Raises FactAlreadyExistsError if an explicit ID is already in use.
        """

    def find_all(self) -> list[Fact]:
        """Return every fact in insertion order."""

    def find_by_id(self, fact_id: int) -> Fact:
        """Raises FactNotFoundError."""

    def update(self, fact: Fact) -> None:
        """Replace the stored fact with the same ID. Raises FactNotFoundError."""

    def delete_by_id(self, fact_id: int) -> None:
        """Raises FactNotFoundError."""
