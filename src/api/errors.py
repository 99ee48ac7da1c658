"""
Error pipeline - ordered error stages for every forwarded exception.

Stages run in a fixed order. Each one receives the request and the
exception and either returns None to pass the error on, or returns a
response, which ends the pipeline:

1. ConsoleErrorLogger  - plain-text line to the operator console
2. FileErrorLogger     - JSON line to the error log file
3. respond_to_client_error - 4xx envelope for client faults
4. respond_with_server_error - 500 envelope, always answers

The logging stages come first so every error is recorded whichever stage
answers it. Not-found lookups are answered directly by the route handlers
and never reach this pipeline.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.envelope import envelope_response, error_envelope, known_status
from src.config.observability import JSONFormatter
from src.config.settings import Settings
from src.domain.exceptions import PieError, PieNotFound

ErrorStage = Callable[[Request, Exception], JSONResponse | None]

SERVER_ERROR_MESSAGE = "An unexpected error occurred."


def describe_error(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


class ConsoleErrorLogger:
    """Writes one unstructured line per error to the console logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logging.getLogger(f"{__name__}.console")

    def __call__(self, request: Request, exc: Exception) -> None:
        self._logger.error("%s %s failed: %s", request.method, request.url.path, describe_error(exc))
        return None


class FileErrorLogger:
    """
    Appends one JSON line per error to a log file.

    Owns a standalone logger that is not attached to the logging
    hierarchy, so entries never reach the console handlers and two
    instances never write to each other's files. The file and its
    directory are created on the first error.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._logger = logging.Logger(f"{__name__}.file", level=logging.ERROR)
        self._handler: logging.FileHandler | None = None

    @property
    def path(self) -> Path:
        return self._path

    def __call__(self, request: Request, exc: Exception) -> None:
        if self._handler is None:
            self._open()
        self._logger.error(
            describe_error(exc),
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={
                "method": request.method,
                "path": request.url.path,
                "error_type": type(exc).__name__,
            },
        )
        return None

    def close(self) -> None:
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    def _open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(self._path, encoding="utf-8")
        handler.setFormatter(JSONFormatter())
        self._logger.addHandler(handler)
        self._handler = handler


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return "Malformed JSON in request body."
    details = "; ".join(
        f"{'.'.join(str(part) for part in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors[:3]
    )
    return f"Invalid request: {details}" if details else "Invalid request."


def respond_to_client_error(request: Request, exc: Exception) -> JSONResponse | None:
    """Answer client faults with a 4xx envelope; forward anything else."""
    if isinstance(exc, RequestValidationError):
        return envelope_response(error_envelope(400, "BAD_REQUEST", _describe_validation_error(exc)))
    if isinstance(exc, PieNotFound):
        return envelope_response(error_envelope(404, "NOT_FOUND", str(exc)))
    if isinstance(exc, StarletteHTTPException) and 400 <= exc.status_code < 500:
        known = known_status(exc.status_code)
        code = known.name if known is not None else "CLIENT_ERROR"
        return envelope_response(
            error_envelope(exc.status_code, code, str(exc.detail)),
            headers=exc.headers,
        )
    return None


def respond_with_server_error(request: Request, exc: Exception) -> JSONResponse:
    """Terminal stage: generic 500 envelope that never exposes the cause."""
    return envelope_response(error_envelope(500, "INTERNAL_SERVER_ERROR", SERVER_ERROR_MESSAGE))


class ErrorPipeline:
    """Runs error stages in order until one produces a response."""

    def __init__(self, stages: Sequence[ErrorStage]) -> None:
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[ErrorStage, ...]:
        return self._stages

    async def handle(self, request: Request, exc: Exception) -> JSONResponse:
        for stage in self._stages:
            response = stage(request, exc)
            if response is not None:
                return response
        raise RuntimeError("Error pipeline has no terminal stage") from exc

    def close(self) -> None:
        for stage in self._stages:
            if isinstance(stage, FileErrorLogger):
                stage.close()


def build_error_pipeline(settings: Settings) -> ErrorPipeline:
    """Create the standard four-stage pipeline."""
    return ErrorPipeline(
        [
            ConsoleErrorLogger(),
            FileErrorLogger(settings.error_log_file),
            respond_to_client_error,
            respond_with_server_error,
        ]
    )


def register_error_handlers(app: FastAPI, pipeline: ErrorPipeline) -> None:
    """
    Route every handled exception type through the pipeline.

    Exception itself is registered last; Starlette answers it from its
    outermost middleware and then re-raises it to the server.
    """
    app.state.error_pipeline = pipeline
    for exc_class in (RequestValidationError, StarletteHTTPException, PieError, Exception):
        app.add_exception_handler(exc_class, pipeline.handle)
