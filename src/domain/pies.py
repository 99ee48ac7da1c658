"""
Pie domain service - CRUD orchestration over the repository port.

Handlers call this service instead of the repository directly so that
multi-step operations (fetch then update, fetch then delete) live in one
place. Lookups that find nothing return None; storage failures propagate
as exceptions raised by the repository.
"""

from dataclasses import dataclass

from .ports import Pie, PieRepository, SearchFilter


@dataclass
class PieService:
    """Domain service for pie records."""

    repository: PieRepository

    async def list_pies(self) -> list[Pie]:
        return await self.repository.get_all()

    async def search_pies(self, pie_id: str | None = None, name: str | None = None) -> list[Pie]:
        """
        Search pies by id and/or name.

        Both criteria are optional; with neither given the result equals
        list_pies().
        """
        return await self.repository.search(SearchFilter(id=pie_id, name=name))

    async def get_pie(self, pie_id: str) -> Pie | None:
        return await self.repository.get_by_id(pie_id)

    async def create_pie(self, pie: Pie) -> Pie:
        return await self.repository.insert(pie)

    async def update_pie(self, pie_id: str, changes: Pie) -> Pie | None:
        """
        Update an existing pie.

        Args:
            pie_id: Id of the pie to update
            changes: Fields to merge onto the stored pie

        Returns:
            The updated pie, or None if the pie does not exist
        """
        existing = await self.repository.get_by_id(pie_id)
        if not existing:
            return None
        return await self.repository.update(pie_id, changes)

    async def delete_pie(self, pie_id: str) -> bool:
        """
        Delete an existing pie.

        Returns:
            True if the pie was deleted, False if it did not exist
        """
        existing = await self.repository.get_by_id(pie_id)
        if not existing:
            return False
        await self.repository.delete(pie_id)
        return True
