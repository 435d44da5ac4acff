"""
PasteShare Backend - Paste Service (Paste Repository)
======================================================

What:  The five paste operations (create, get, list, update, delete) plus
       the recent-pastes query, issued against the `pastes` table.
How:   Each method receives the request's AsyncSession, applies the input
       rules (trim, defaults, non-empty content), runs its statement(s)
       and returns response schemas.
Who:   Called by the paste route handlers.

Operation Contract:
    ┌──────────┬──────────────────────────────────────┬─────────────────┐
    │ create   │ INSERT one row                       │ PasteResponse   │
    │ get      │ SELECT ... WHERE id = :id            │ PasteResponse   │
    │ list     │ SELECT page + SELECT count(*)        │ PasteListResp.  │
    │ update   │ UPDATE ... WHERE id = :id RETURNING  │ PasteResponse   │
    │ delete   │ DELETE ... WHERE id = :id            │ None            │
    └──────────┴──────────────────────────────────────┴─────────────────┘

    Mutations are single statements and commit before the method returns;
    a failed commit raises StoreError. Nothing is cached, buffered or retried.

Known properties:
    - Concurrent updates of one paste are last-writer-wins (no version column).
    - Update and delete perform no ownership check: anyone holding an id
      can change or remove that paste.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pasteshare.exceptions import NotFoundError, PasteShareError, StoreError, ValidationError
from pasteshare.languages import DEFAULT_LANGUAGE, is_known, language_label
from pasteshare.models.paste import Paste, utcnow
from pasteshare.pagination import (
    PAGE_SIZE,
    RECENT_LIMIT,
    PasteListQuery,
    page_bounds,
    page_window,
    total_pages,
)
from pasteshare.schemas.paste import (
    PasteCreate,
    PasteListItem,
    PasteListResponse,
    PasteResponse,
    PasteUpdate,
)

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
PREVIEW_LENGTH = 150


def _store_message(exc: Exception) -> str:
    # DBAPIError wraps the driver exception in .orig; its text omits the SQL
    original = getattr(exc, "orig", None) or exc
    return str(original).strip() or type(original).__name__


@contextmanager
def _store_errors(action: str, **context) -> Iterator[None]:
    """
    Translate store failures raised inside the block into StoreError.

    Our own exceptions pass through unchanged.
    """
    try:
        yield
    except PasteShareError:
        raise
    except Exception as e:
        logger.error("Store error while trying to %s: %s", action, e, exc_info=True)
        raise StoreError(
            message=f"Could not {action}",
            store_message=_store_message(e),
            context=context,
        ) from e


def normalize_paste_input(data: PasteCreate) -> Tuple[str, str, str]:
    """
    Apply the input rules shared by create and update.

    Returns:
        (title, content, language) trimmed and defaulted

    Raises:
        ValidationError: content is empty after trimming
    """
    content = data.content.strip()
    if not content:
        raise ValidationError(message="Content is required", field="content")
    title = data.title.strip() or UNTITLED
    language = data.language.strip() or DEFAULT_LANGUAGE
    return title, content, language


def to_paste_response(paste: Paste) -> PasteResponse:
    return PasteResponse(
        id=paste.id,
        title=paste.title,
        content=paste.content,
        language=paste.language,
        language_label=language_label(paste.language),
        is_public=paste.is_public,
        user_id=paste.user_id,
        created_at=paste.created_at,
        updated_at=paste.updated_at,
        line_count=len(paste.content.split("\n")),
        char_count=len(paste.content),
        url=f"/api/pastes/{paste.id}",
    )


def content_preview(content: str, max_length: int = PREVIEW_LENGTH) -> str:
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."


def to_list_item(paste: Paste) -> PasteListItem:
    return PasteListItem(
        id=paste.id,
        title=paste.title,
        language=paste.language,
        language_label=language_label(paste.language),
        preview=content_preview(paste.content),
        created_at=paste.created_at,
        user_id=paste.user_id,
    )


class PasteService:
    """
    Business logic layer for paste operations.

    Stateless: the session is passed into every call, so one instance can
    serve all requests.

    Error Handling Strategy:
        - Input rules fail with ValidationError before the session is touched.
        - A missing row becomes NotFoundError.
        - Anything the store raises becomes StoreError carrying the store's
          message.
    """

    async def create_paste(self, db: AsyncSession, data: PasteCreate) -> PasteResponse:
        """
        Insert a new paste.

        Workflow:
            1. Trim/default title, content and language (may raise ValidationError)
            2. Build the row with a fresh id and created_at == updated_at
            3. Flush the INSERT and commit

        Raises:
            ValidationError: blank content (no store call is made)
            StoreError: INSERT or commit failed
        """
        title, content, language = normalize_paste_input(data)
        if not is_known(language):
            logger.info("Storing paste with unlisted language %r", language)
        now = utcnow()
        paste = Paste(
            id=uuid.uuid4(),
            title=title,
            content=content,
            language=language,
            is_public=data.is_public,
            user_id=None,
            created_at=now,
            updated_at=now,
        )

        with _store_errors("create paste"):
            db.add(paste)
            await db.flush()
            await db.commit()

        logger.info(
            "Paste created: %s (language=%s, public=%s, %d chars)",
            paste.id, paste.language, paste.is_public, len(paste.content),
        )
        return to_paste_response(paste)

    async def get_paste(self, db: AsyncSession, paste_id: UUID) -> PasteResponse:
        """
        Fetch one paste by id, public or not.

        Query plan:
            SELECT * FROM pastes WHERE id = :uuid (primary key lookup)

        Raises:
            NotFoundError: no row has this id
            StoreError: query execution failed
        """
        with _store_errors("retrieve paste", paste_id=str(paste_id)):
            result = await db.execute(select(Paste).where(Paste.id == paste_id))
            paste = result.scalar_one_or_none()

        if paste is None:
            raise NotFoundError(resource="paste", resource_id=str(paste_id))
        return to_paste_response(paste)

    async def list_pastes(self, db: AsyncSession, query: PasteListQuery) -> PasteListResponse:
        """
        One page of public pastes matching the filter, newest first.

        Filters (combined with AND):
            - is_public is true (always)
            - language = :language, unless the filter is 'all' or blank
            - title or content contains the search term, case-insensitive,
              with LIKE wildcards in the term matched literally

        Two statements run: the page query (OFFSET/LIMIT) and a COUNT over
        the same filter for total_count.

        Raises:
            ValidationError: page below 1
            StoreError: either query failed
        """
        if query.page < 1:
            raise ValidationError(
                message="Page must be 1 or greater",
                field="page",
                context={"page": query.page},
            )

        conditions = [Paste.is_public.is_(True)]
        if query.language_filter is not None:
            conditions.append(Paste.language == query.language_filter)
        if query.search_term is not None:
            conditions.append(
                or_(
                    Paste.title.icontains(query.search_term, autoescape=True),
                    Paste.content.icontains(query.search_term, autoescape=True),
                )
            )

        first, _ = page_bounds(query.page)

        with _store_errors("retrieve pastes"):
            result = await db.execute(
                select(Paste)
                .where(*conditions)
                .order_by(Paste.created_at.desc())
                .offset(first)
                .limit(PAGE_SIZE)
            )
            pastes = list(result.scalars().all())

            count_result = await db.execute(
                select(func.count()).select_from(Paste).where(*conditions)
            )
            total_count = count_result.scalar() or 0

        pages = total_pages(total_count)
        return PasteListResponse(
            pastes=[to_list_item(paste) for paste in pastes],
            total_count=total_count,
            page=query.page,
            page_size=PAGE_SIZE,
            total_pages=pages,
            page_numbers=page_window(query.page, pages),
            text_query=query.text_query,
            language=query.language,
        )

    async def recent_pastes(self, db: AsyncSession, limit: int = RECENT_LIMIT) -> List[PasteListItem]:
        """Newest public pastes, at most `limit`."""
        with _store_errors("retrieve recent pastes"):
            result = await db.execute(
                select(Paste)
                .where(Paste.is_public.is_(True))
                .order_by(Paste.created_at.desc())
                .limit(limit)
            )
            pastes = result.scalars().all()
        return [to_list_item(paste) for paste in pastes]

    async def update_paste(
        self,
        db: AsyncSession,
        paste_id: UUID,
        data: PasteUpdate,
    ) -> PasteResponse:
        """
        Overwrite the editable fields of a paste and stamp updated_at.

        Runs a single UPDATE ... RETURNING; id, created_at and user_id are
        never part of the SET clause. There is no version check, so the
        last writer wins.

        Raises:
            ValidationError: blank content (no store call is made)
            NotFoundError: no row has this id
            StoreError: UPDATE or commit failed
        """
        title, content, language = normalize_paste_input(data)

        with _store_errors("update paste", paste_id=str(paste_id)):
            result = await db.execute(
                update(Paste)
                .where(Paste.id == paste_id)
                .values(
                    title=title,
                    content=content,
                    language=language,
                    is_public=data.is_public,
                    updated_at=utcnow(),
                )
                .returning(Paste)
            )
            paste = result.scalar_one_or_none()
            if paste is not None:
                await db.commit()

        if paste is None:
            raise NotFoundError(resource="paste", resource_id=str(paste_id))

        logger.info("Paste updated: %s", paste_id)
        return to_paste_response(paste)

    async def delete_paste(self, db: AsyncSession, paste_id: UUID) -> None:
        """
        Permanently remove a paste.

        Deleting an id that matches no row is not an error; it is logged
        and the call succeeds.

        Raises:
            StoreError: DELETE or commit failed
        """
        with _store_errors("delete paste", paste_id=str(paste_id)):
            result = await db.execute(delete(Paste).where(Paste.id == paste_id))
            await db.commit()

        if result.rowcount == 0:
            logger.info("Delete requested for missing paste %s", paste_id)
        else:
            logger.info("Paste deleted: %s", paste_id)


paste_service = PasteService()
