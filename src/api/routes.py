"""
API routes - Pie CRUD endpoints.

This module defines the HTTP endpoints, mounted under the configured
prefix (default /api):
- GET    /          - List all pies
- GET    /search    - Search pies by id and/or name
- GET    /{pie_id}  - Get a single pie
- POST   /          - Add a pie
- PUT    /{pie_id}  - Update a pie
- PATCH  /{pie_id}  - Patch a pie
- DELETE /{pie_id}  - Delete a pie

Handlers answer successes and not-found lookups themselves and write one
request-log entry for each. Repository failures are left to propagate to
the error pipeline.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_pie_service, get_repository, get_request_logger
from src.api.envelope import build_envelope, envelope_response, error_envelope
from src.api.models import ErrorEnvelope, SuccessEnvelope
from src.domain.exceptions import PieNotFound
from src.domain.pies import PieService
from src.domain.ports import PieRepository, RequestLogger

router = APIRouter(tags=["pies"])
health_router = APIRouter(tags=["health"])

NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorEnvelope, "description": "Pie not found"},
}


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "method": request.method,
        "path": request.url.path,
        "query": dict(request.query_params),
        "path_params": dict(request.path_params),
    }


def _send(request: Request, request_logger: RequestLogger, envelope: dict[str, Any]) -> JSONResponse:
    """Log the exchange and send the envelope."""
    level = "error" if "error" in envelope else "info"
    request_logger.log(
        level,
        envelope["message"],
        {"request": _request_context(request), "response": {"status": envelope["status"], "body": envelope}},
    )
    return envelope_response(envelope)


def _not_found(request: Request, request_logger: RequestLogger, pie_id: str) -> JSONResponse:
    message = str(PieNotFound(pie_id))
    return _send(request, request_logger, error_envelope(404, "NOT_FOUND", message))


@router.get(
    "/",
    response_model=SuccessEnvelope,
    summary="List all pies",
)
async def list_pies(
    request: Request,
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    pies = await service.list_pies()
    return _send(request, request_logger, build_envelope(200, "All pies retrieved.", data=pies))


@router.get(
    "/search",
    response_model=SuccessEnvelope,
    summary="Search pies",
    description="Filter pies by exact id and/or case-insensitive name substring. "
    "Without parameters every pie is returned.",
)
async def search_pies(
    request: Request,
    pie_id: str | None = Query(None, alias="id"),
    name: str | None = Query(None),
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    pies = await service.search_pies(pie_id=pie_id, name=name)
    return _send(request, request_logger, build_envelope(200, "All pies retrieved.", data=pies))


@router.get(
    "/{pie_id}",
    response_model=SuccessEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a single pie",
)
async def get_pie(
    pie_id: str,
    request: Request,
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    pie = await service.get_pie(pie_id)
    if not pie:
        return _not_found(request, request_logger, pie_id)
    return _send(request, request_logger, build_envelope(200, "Single pie retrieved.", data=pie))


@router.post(
    "/",
    response_model=SuccessEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorEnvelope, "description": "Malformed request body"}},
    summary="Add a pie",
    description="Store the JSON object body as a new pie. The id is assigned by the server.",
)
async def create_pie(
    request: Request,
    pie: dict[str, Any] = Body(...),
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    created = await service.create_pie(pie)
    return _send(request, request_logger, build_envelope(201, "New pie added.", data=created))


@router.put(
    "/{pie_id}",
    response_model=SuccessEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Update a pie",
)
async def update_pie(
    pie_id: str,
    request: Request,
    pie: dict[str, Any] = Body(...),
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    updated = await service.update_pie(pie_id, pie)
    if updated is None:
        return _not_found(request, request_logger, pie_id)
    return _send(request, request_logger, build_envelope(200, f"Pie '{pie_id}' updated.", data=updated))


@router.patch(
    "/{pie_id}",
    response_model=SuccessEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Patch a pie",
)
async def patch_pie(
    pie_id: str,
    request: Request,
    pie: dict[str, Any] = Body(...),
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    patched = await service.update_pie(pie_id, pie)
    if patched is None:
        return _not_found(request, request_logger, pie_id)
    return _send(request, request_logger, build_envelope(200, f"Pie '{pie_id}' patched.", data=patched))


@router.delete(
    "/{pie_id}",
    response_model=SuccessEnvelope,
    responses=NOT_FOUND_RESPONSE,
    summary="Delete a pie",
)
async def delete_pie(
    pie_id: str,
    request: Request,
    service: PieService = Depends(get_pie_service),
    request_logger: RequestLogger = Depends(get_request_logger),
) -> JSONResponse:
    if not await service.delete_pie(pie_id):
        return _not_found(request, request_logger, pie_id)
    envelope = build_envelope(200, f"The pie '{pie_id}' is deleted.", data=f"Pie '{pie_id}' deleted.")
    return _send(request, request_logger, envelope)


@health_router.get("/health")
async def health_check(repository: PieRepository = Depends(get_repository)) -> dict[str, str]:
    """
    Health check endpoint with repository validation.

    Returns 200 OK if the repository can be read; a repository failure
    is answered by the error pipeline.
    """
    await repository.get_all()
    return {"status": "healthy"}
