"""
JSON file repository adapter - Implements PieRepository protocol.

Stores the whole collection as a JSON array in a single file. Every
operation re-reads the file and every mutation rewrites it, so several
processes pointed at the same file see each other's writes (without any
locking between them).

Blocking file I/O runs in a worker thread via asyncio.to_thread() to keep
the event loop free. Any I/O or decoding failure is raised as
RepositoryError so the HTTP layer can answer it through the error pipeline.
"""

import asyncio
import json
import logging
from pathlib import Path

from src.domain.exceptions import PieNotFound, RepositoryError
from src.domain.ports import Pie, SearchFilter

from ._records import find_index, merged_record, new_record

logger = logging.getLogger(__name__)


class JsonFilePieRepository:
    """
    Implements PieRepository protocol over a JSON array file.

    Uses structural subtyping - no explicit inheritance from Protocol.
    A missing file reads as an empty collection and is created on the
    first write.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize repository with the data file location.

        Args:
            path: Path of the JSON file holding the pie array
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def get_all(self) -> list[Pie]:
        return await self._read()

    async def get_by_id(self, pie_id: str) -> Pie | None:
        pies = await self._read()
        index = find_index(pies, pie_id)
        return None if index is None else pies[index]

    async def search(self, search_filter: SearchFilter) -> list[Pie]:
        pies = await self._read()
        return [pie for pie in pies if search_filter.matches(pie)]

    async def insert(self, pie: Pie) -> Pie:
        pies = await self._read()
        record = new_record(pies, pie)
        pies.append(record)
        await self._write(pies)
        return record

    async def update(self, pie_id: str, pie: Pie) -> Pie:
        pies = await self._read()
        index = find_index(pies, pie_id)
        if index is None:
            raise PieNotFound(pie_id)
        pies[index] = merged_record(pies[index], pie)
        await self._write(pies)
        return pies[index]

    async def delete(self, pie_id: str) -> None:
        pies = await self._read()
        index = find_index(pies, pie_id)
        if index is None:
            raise PieNotFound(pie_id)
        del pies[index]
        await self._write(pies)

    async def _read(self) -> list[Pie]:
        return await asyncio.to_thread(self._read_sync)

    async def _write(self, pies: list[Pie]) -> None:
        await asyncio.to_thread(self._write_sync, pies)

    def _read_sync(self) -> list[Pie]:
        if not self._path.exists():
            return []
        try:
            with self._path.open(encoding="utf-8") as f:
                pies = json.load(f)
        except OSError as e:
            raise RepositoryError(f"Could not read {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise RepositoryError(f"Invalid JSON in {self._path}: {e}") from e
        if not isinstance(pies, list):
            raise RepositoryError(f"Expected a JSON array in {self._path}")
        if not all(isinstance(pie, dict) for pie in pies):
            raise RepositoryError(f"Expected only JSON objects in the array in {self._path}")
        return pies

    def _write_sync(self, pies: list[Pie]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump(pies, f, indent=2)
        except OSError as e:
            raise RepositoryError(f"Could not write {self._path}: {e}") from e
        logger.debug("Wrote %d pies to %s", len(pies), self._path)
