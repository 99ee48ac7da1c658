"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Settings isolated from the working directory (error log under tmp_path)
- Seeded in-memory repositories
- Application and test client setup
"""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.repository import InMemoryPieRepository
from src.api.main import create_app
from src.config.settings import Settings


@pytest.fixture
def error_log_path(tmp_path: Path) -> Path:
    """Error log location inside the test's temporary directory."""
    return tmp_path / "logs" / "errors.log"


@pytest.fixture
def settings(error_log_path: Path) -> Settings:
    """Settings with in-memory storage and a temporary error log."""
    return Settings(data_file=None, error_log_file=str(error_log_path), api_prefix="/api")


@pytest.fixture
def seed_pies() -> list[dict]:
    """Pies loaded into the repository before each test."""
    return [
        {"id": 1, "name": "Apple"},
        {"id": 2, "name": "Cherry", "crust": "lattice"},
        {"id": 3, "name": "Apple Crumble"},
    ]


@pytest.fixture
def repository(seed_pies: list[dict]) -> InMemoryPieRepository:
    """In-memory repository seeded with seed_pies."""
    return InMemoryPieRepository(seed_pies)


@pytest.fixture
def app(settings: Settings, repository: InMemoryPieRepository) -> FastAPI:
    """Create a fully wired application."""
    test_app = create_app(settings=settings, repository=repository)
    yield test_app
    test_app.state.error_pipeline.close()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)
