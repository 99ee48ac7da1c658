"""
API response models.

Pydantic models describing the response envelope shared by every
endpoint, used for serialization and OpenAPI schema generation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Machine-readable error code and human-readable message."""

    code: str = Field(..., description="Error code, e.g. NOT_FOUND")
    message: str


class EnvelopeBase(BaseModel):
    """Fields present on every response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    status: int = Field(..., description="HTTP status code, equal to the response status")
    status_text: str = Field(..., alias="statusText", description="Reason phrase for the status")
    message: str


class SuccessEnvelope(EnvelopeBase):
    """Envelope for successful responses."""

    data: Any = Field(..., description="Pie, list of pies, or confirmation string")


class ErrorEnvelope(EnvelopeBase):
    """Envelope for error responses."""

    error: ErrorDetail
