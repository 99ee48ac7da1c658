"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the search filter shared by every repository.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Any, Protocol

# A pie is an arbitrary JSON object; only "id" and "name" carry meaning.
Pie = dict[str, Any]


@dataclass(frozen=True)
class SearchFilter:
    """
    Search criteria for pies.

    Match semantics:
    - id: exact match against the pie id compared as text ("1" matches 1)
    - name: case-insensitive substring of the pie name
    - Absent (None or empty) criteria match everything; given criteria
      must all match.
    """

    id: str | None = None
    name: str | None = None

    def matches(self, pie: Pie) -> bool:
        if self.id and str(pie.get("id")) != self.id:
            return False
        if self.name:
            name = pie.get("name")
            if not isinstance(name, str) or self.name.lower() not in name.lower():
                return False
        return True


class PieRepository(Protocol):
    """Port interface for pie persistence."""

    async def get_all(self) -> list[Pie]:
        """Return every stored pie."""
        ...

    async def get_by_id(self, pie_id: str) -> Pie | None:
        """
        Look up a single pie.

        Args:
            pie_id: Pie id as received from the client (compared as text)

        Returns:
            The pie, or None if no pie has that id
        """
        ...

    async def search(self, search_filter: SearchFilter) -> list[Pie]:
        """Return the pies accepted by search_filter.matches()."""
        ...

    async def insert(self, pie: Pie) -> Pie:
        """
        Store a new pie.

        Any client-supplied id is discarded; the repository assigns one.

        Returns:
            The stored pie including its assigned id
        """
        ...

    async def update(self, pie_id: str, pie: Pie) -> Pie:
        """
        Merge fields onto the stored pie, keeping its id.

        Returns:
            The stored pie after the update

        Raises:
            PieNotFound: If no pie has that id
        """
        ...

    async def delete(self, pie_id: str) -> None:
        """
        Remove a pie.

        Raises:
            PieNotFound: If no pie has that id
        """
        ...


class RequestLogger(Protocol):
    """Port interface for structured request logging."""

    def log(self, level: str, message: str, context: dict[str, Any]) -> None:
        """
        Record one entry.

        Args:
            level: "info", "warning" or "error"
            message: Human-readable summary
            context: Structured data (request and response)
        """
        ...
