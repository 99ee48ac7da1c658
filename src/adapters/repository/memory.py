"""
In-memory repository adapter - Implements PieRepository protocol.

Keeps pies in a plain list for the lifetime of the process. Records are
copied on the way in and out so callers never hold references into the
stored collection.
"""

import copy
import logging

from src.domain.exceptions import PieNotFound
from src.domain.ports import Pie, SearchFilter

from ._records import find_index, merged_record, new_record

logger = logging.getLogger(__name__)


class InMemoryPieRepository:
    """
    Implements PieRepository protocol with a list.

    Uses structural subtyping - no explicit inheritance from Protocol.
    No locking: concurrent writers see last-write-wins behaviour.
    """

    def __init__(self, pies: list[Pie] | None = None) -> None:
        """
        Initialize repository with optional seed data.

        Args:
            pies: Initial pies; each must already carry an id
        """
        self._pies: list[Pie] = copy.deepcopy(pies) if pies else []

    async def get_all(self) -> list[Pie]:
        return copy.deepcopy(self._pies)

    async def get_by_id(self, pie_id: str) -> Pie | None:
        index = find_index(self._pies, pie_id)
        if index is None:
            return None
        return copy.deepcopy(self._pies[index])

    async def search(self, search_filter: SearchFilter) -> list[Pie]:
        return [copy.deepcopy(pie) for pie in self._pies if search_filter.matches(pie)]

    async def insert(self, pie: Pie) -> Pie:
        record = new_record(self._pies, pie)
        self._pies.append(record)
        logger.debug("Inserted pie %s", record["id"])
        return copy.deepcopy(record)

    async def update(self, pie_id: str, pie: Pie) -> Pie:
        index = find_index(self._pies, pie_id)
        if index is None:
            raise PieNotFound(pie_id)
        record = merged_record(self._pies[index], pie)
        self._pies[index] = record
        return copy.deepcopy(record)

    async def delete(self, pie_id: str) -> None:
        index = find_index(self._pies, pie_id)
        if index is None:
            raise PieNotFound(pie_id)
        del self._pies[index]
        logger.debug("Deleted pie %s", pie_id)
