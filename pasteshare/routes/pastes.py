"""
PasteShare Backend - Paste Route Handlers
==========================================

What:  CRUD endpoints for pastes, the download endpoint and the language table.
How:   Extracts path/query/body parameters, delegates to PasteService,
       sets response headers.
Who:   Called by the web front end (create form, paste view, edit form,
       browse page, delete dialog).

Caching:
    Paste content is mutable, so GET responses carry `no-cache` and clients
    revalidate on every view.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pasteshare.database import get_db_session
from pasteshare.languages import ALL_LANGUAGES, LANGUAGES, download_filename
from pasteshare.pagination import PasteListQuery
from pasteshare.schemas.paste import (
    ErrorResponse,
    LanguageResponse,
    PasteCreate,
    PasteListItem,
    PasteListResponse,
    PasteResponse,
    PasteUpdate,
)
from pasteshare.services.paste_service import paste_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Pastes"])


@router.post(
    "/pastes",
    status_code=201,
    response_model=PasteResponse,
    responses={
        201: {"description": "Paste created", "model": PasteResponse},
        400: {"description": "Content is blank", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a paste",
)
async def create_paste(
    payload: PasteCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PasteResponse:
    """
    Store a new paste.

    Title is trimmed ("Untitled" when blank), content is trimmed and must
    not be blank, language defaults to "text". The Location header points
    at the new paste.
    """
    paste = await paste_service.create_paste(db, payload)
    response.headers["Location"] = paste.url
    return paste


@router.get(
    "/pastes",
    response_model=PasteListResponse,
    responses={
        200: {"description": "One page of public pastes", "model": PasteListResponse},
        400: {"description": "Invalid page", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List and search public pastes",
    description=(
        "Returns 12 public pastes per page, newest first. `q` matches title or "
        "content case-insensitively; `language` restricts to one language "
        "('all' for every language)."
    ),
)
async def list_pastes(
    response: Response,
    q: str = Query(default="", description="Search term for title or content"),
    language: str = Query(default=ALL_LANGUAGES, description="Language value or 'all'"),
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    db: AsyncSession = Depends(get_db_session),
) -> PasteListResponse:
    """
    Browse public pastes.

    Example client usage:
        GET /api/pastes                          (page 1, everything)
        GET /api/pastes?language=python&q=flask  (filtered, page 1)
        GET /api/pastes?language=python&q=flask&page=2
    """
    query = PasteListQuery(text_query=q, language=language, page=page)
    result = await paste_service.list_pastes(db, query)

    response.headers["X-Total-Count"] = str(result.total_count)
    response.headers["Cache-Control"] = "no-cache"
    return result


@router.get(
    "/pastes/recent",
    response_model=List[PasteListItem],
    summary="Newest public pastes",
)
async def recent_pastes(
    db: AsyncSession = Depends(get_db_session),
) -> List[PasteListItem]:
    """The six newest public pastes, shown on the home page."""
    return await paste_service.recent_pastes(db)


@router.get(
    "/pastes/{paste_id}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Full paste", "model": PasteResponse},
        404: {"description": "Paste not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single paste by ID",
)
async def get_paste(
    paste_id: UUID,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PasteResponse:
    """
    Full paste by id. Private pastes are returned too; only the list
    hides them.

    Invalid UUIDs return 422 (FastAPI default).
    """
    paste = await paste_service.get_paste(db, paste_id)
    response.headers["Cache-Control"] = "no-cache"
    return paste


@router.put(
    "/pastes/{paste_id}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Paste updated", "model": PasteResponse},
        400: {"description": "Content is blank", "model": ErrorResponse},
        404: {"description": "Paste not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Update a paste",
)
async def update_paste(
    paste_id: UUID,
    payload: PasteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PasteResponse:
    """Replace title, content, language and visibility; updated_at is set to now."""
    return await paste_service.update_paste(db, paste_id, payload)


@router.delete(
    "/pastes/{paste_id}",
    status_code=204,
    responses={
        204: {"description": "Paste deleted (or already absent)"},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a paste permanently",
)
async def delete_paste(
    paste_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Hard delete. Repeating the call for the same id also returns 204."""
    await paste_service.delete_paste(db, paste_id)
    return Response(status_code=204)


@router.get(
    "/pastes/{paste_id}/download",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Paste content as a file", "content": {"text/plain": {}}},
        404: {"description": "Paste not found", "model": ErrorResponse},
    },
    summary="Download paste content as a file",
)
async def download_paste(
    paste_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    """
    Paste content as an attachment named after the title, with the
    language's extension (e.g. `my_script.py`).
    """
    paste = await paste_service.get_paste(db, paste_id)
    filename = download_filename(paste.title, paste.language)
    return PlainTextResponse(
        content=paste.content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/languages",
    response_model=List[LanguageResponse],
    summary="Supported languages",
)
async def list_languages() -> List[LanguageResponse]:
    """The language values accepted by the create and edit forms."""
    return [
        LanguageResponse(value=lang.value, label=lang.label, extension=lang.extension)
        for lang in LANGUAGES
    ]
