"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the pie service
and its collaborators into routes, plus the factory that picks a
repository adapter from settings.
"""

from fastapi import Request

from src.adapters.repository import InMemoryPieRepository, JsonFilePieRepository
from src.config.settings import Settings
from src.domain.pies import PieService
from src.domain.ports import PieRepository, RequestLogger


def build_repository(settings: Settings) -> PieRepository:
    """
    Create the repository adapter selected by settings.

    A configured data_file selects the JSON file repository; otherwise
    pies live in memory for the life of the process.
    """
    if settings.data_file:
        return JsonFilePieRepository(settings.data_file)
    return InMemoryPieRepository()


def get_repository(request: Request) -> PieRepository:
    """
    Get repository from app state.

    The repository is created by create_app() and stored in app.state.
    """
    return request.app.state.repository


def get_request_logger(request: Request) -> RequestLogger:
    """Get request logger from app state."""
    return request.app.state.request_logger


def get_pie_service(request: Request) -> PieService:
    """Create pie service wired to the app's repository."""
    return PieService(repository=get_repository(request))
