"""
Response envelope builder.

Every response body, success or error, goes through build_envelope() so
the two shapes differ only by carrying "data" or "error".
"""

from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse

from src.api.models import ErrorDetail, ErrorEnvelope, SuccessEnvelope

_NO_DATA = object()


def known_status(status: int) -> HTTPStatus | None:
    """The HTTPStatus member for status, or None for a non-standard code."""
    try:
        return HTTPStatus(status)
    except ValueError:
        return None


def status_text_for(status: int) -> str:
    """Reason phrase for status; non-standard codes get their class name."""
    known = known_status(status)
    if known is not None:
        return known.phrase
    if 400 <= status < 500:
        return "Client Error"
    if 500 <= status < 600:
        return "Server Error"
    return "Unknown Status"


def build_envelope(
    status: int,
    message: str,
    *,
    data: Any = _NO_DATA,
    error: ErrorDetail | None = None,
) -> dict[str, Any]:
    """
    Build a response envelope.

    Args:
        status: HTTP status code; statusText is derived from it
        message: Human-readable outcome
        data: Payload for a success envelope
        error: Error detail for an error envelope

    Returns:
        JSON-ready dict using the public key names (statusText)

    Raises:
        ValueError: If both or neither of data and error are given
    """
    if (data is _NO_DATA) == (error is None):
        raise ValueError("An envelope carries exactly one of data or error")

    status_text = status_text_for(status)
    if error is not None:
        envelope = ErrorEnvelope(status=status, status_text=status_text, message=message, error=error)
    else:
        envelope = SuccessEnvelope(status=status, status_text=status_text, message=message, data=data)
    return envelope.model_dump(mode="json", by_alias=True)


def error_envelope(status: int, code: str, message: str) -> dict[str, Any]:
    """Error envelope whose top-level message repeats the error message."""
    return build_envelope(status, message, error=ErrorDetail(code=code, message=message))


def envelope_response(
    envelope: dict[str, Any], headers: dict[str, str] | None = None
) -> JSONResponse:
    """Send an envelope with the HTTP status taken from its status field."""
    return JSONResponse(status_code=envelope["status"], content=envelope, headers=headers)
