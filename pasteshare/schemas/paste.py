"""
PasteShare Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for pastes.
How:   FastAPI validates request bodies against the input models and
       serializes responses through the output models; both feed the
       OpenAPI docs.
Who:   Request models are built by route handlers; response models are
       returned by the paste repository.

Request bodies accept blank titles and blank content on purpose: trimming,
the "Untitled" default and the non-empty content rule are applied by the
repository, so they hold no matter who calls it.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from pasteshare.languages import DEFAULT_LANGUAGE


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What the client sends
# ══════════════════════════════════════════════════════════════════════════


class PasteCreate(BaseModel):
    """Body of POST /api/pastes."""
    title: str = Field(default="", description="Optional title; blank becomes 'Untitled'")
    content: str = Field(description="Paste body; must not be blank")
    language: str = Field(default=DEFAULT_LANGUAGE, max_length=50, description="Language value")
    is_public: bool = Field(default=True, description="Show in public list and search")


class PasteUpdate(PasteCreate):
    """
    Body of PUT /api/pastes/{id}.

    A full replacement of the editable fields. `id`, `created_at` and
    `user_id` are not part of the body and cannot be changed.
    """


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class PasteResponse(BaseModel):
    """
    What:  Full representation of a paste.
    Who:   Returned by create, update and GET /api/pastes/{id}.

    Derived fields:
        - language_label: display name from the language table
        - line_count / char_count: shown next to the content
        - url: API path of this paste
    """
    id: uuid.UUID = Field(description="Unique paste identifier (UUID)")
    title: str = Field(description="Paste title")
    content: str = Field(description="Full paste content")
    language: str = Field(description="Language value")
    language_label: str = Field(description="Language display label")
    is_public: bool = Field(description="Whether the paste is listed publicly")
    user_id: Optional[uuid.UUID] = Field(default=None, description="Owner (always null)")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    line_count: int = Field(description="Number of lines in content")
    char_count: int = Field(description="Number of characters in content")
    url: str = Field(description="API path of this paste")

    model_config = {"from_attributes": True}


class PasteListItem(BaseModel):
    """
    What:  Compact paste representation for list views.
    Who:   Items of GET /api/pastes and GET /api/pastes/recent.

    `preview` holds the first 150 characters of content, with "..."
    appended when the content was cut.
    """
    id: uuid.UUID = Field(description="Unique paste identifier")
    title: str = Field(description="Paste title")
    language: str = Field(description="Language value")
    language_label: str = Field(description="Language display label")
    preview: str = Field(description="Content preview (150 characters)")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    user_id: Optional[uuid.UUID] = Field(default=None, description="Owner (always null)")

    model_config = {"from_attributes": True}


class PasteListResponse(BaseModel):
    """
    What:  Paginated response wrapper for the paste list endpoint.
    Who:   Returned by GET /api/pastes.

    Pagination is offset based with a fixed page size of 12; total_count
    counts every public paste matching the filter, before pagination.
    """
    pastes: List[PasteListItem] = Field(description="Pastes on this page, newest first")
    total_count: int = Field(description="Total number of pastes matching the filter")
    page: int = Field(description="Current page (1-indexed)")
    page_size: int = Field(description="Items per page")
    total_pages: int = Field(description="Number of pages for total_count")
    page_numbers: List[int] = Field(description="Up to 5 page numbers around the current page")
    text_query: str = Field(default="", description="Search term applied")
    language: str = Field(default="all", description="Language filter applied")


class LanguageResponse(BaseModel):
    """One entry of GET /api/languages."""
    value: str
    label: str
    extension: str


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "paste with ID '...' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
