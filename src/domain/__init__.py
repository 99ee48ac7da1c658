"""
Domain layer - Pure business logic with zero framework imports.

This package contains the pie service and the port interfaces it needs
from infrastructure, keeping the HTTP layer and storage adapters decoupled.
"""

from .exceptions import PieError, PieNotFound, RepositoryError
from .pies import PieService
from .ports import Pie, PieRepository, RequestLogger, SearchFilter

__all__ = [
    "Pie",
    "PieError",
    "PieNotFound",
    "PieRepository",
    "PieService",
    "RepositoryError",
    "RequestLogger",
    "SearchFilter",
]
