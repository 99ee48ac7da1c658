"""Repository adapters - Pie storage implementations."""

from .json_file import JsonFilePieRepository
from .memory import InMemoryPieRepository

__all__ = ["InMemoryPieRepository", "JsonFilePieRepository"]
