"""
Domain exceptions - Semantic error types for pie storage.

This module defines domain-specific exceptions that communicate
storage failures and missing records without leaking infrastructure details.
"""


class PieError(Exception):
    """Base class for pie domain errors."""

    pass


class PieNotFound(PieError):
    """No pie exists with the requested id."""

    def __init__(self, pie_id: str) -> None:
        self.pie_id = pie_id
        super().__init__(f"The pie '{pie_id}' could not be found.")


class RepositoryError(PieError):
    """The repository could not complete an operation."""

    pass
