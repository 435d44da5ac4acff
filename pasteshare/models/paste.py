"""
PasteShare Backend - Paste SQLAlchemy Model
============================================

What:  ORM model representing the `pastes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by the paste repository for CRUD and by Alembic's env.py.

Table Design:
    - id: UUID primary key, generated on insert and never changed
    - title / content: user text; content is TEXT with no length limit
    - language: short label from the language table (other values allowed)
    - is_public: gates visibility in list, search and recent queries
    - user_id: reserved for an owner; always NULL (no authentication)
    - created_at / updated_at: UTC with timezone

    Index on created_at DESC serves every list query, which is always
    ordered newest first.

Portable column types (Uuid, DateTime(timezone=True)) are used so the same
model runs on PostgreSQL and on SQLite in tests. PostgreSQL-only server
defaults live in the Alembic migration.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from pasteshare.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Paste(Base):
    """
    A stored text/code snippet.

    Lifecycle:
        1. Inserted by the create operation (created_at == updated_at)
        2. Optionally rewritten by update (title, content, language,
           is_public, updated_at)
        3. Removed by delete; there is no soft delete

    Query Patterns:
        - Public list: WHERE is_public AND [language = :l] AND
          [title ILIKE :q OR content ILIKE :q] ORDER BY created_at DESC
          LIMIT 12 OFFSET :o
        - Single paste: WHERE id = :uuid (primary key)
    """

    __tablename__ = "pastes"

    # ── Primary Key ───────────────────────────────────────────────────────
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique paste identifier",
    )

    # ── User Content ──────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="Untitled",
        comment="Paste title; 'Untitled' when left blank",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Paste body, stored trimmed and never empty",
    )

    language: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="text",
        comment="Language value, e.g. python, bash, text",
    )

    # ── Visibility / Ownership ────────────────────────────────────────────
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Public pastes appear in list and search results",
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        default=None,
        comment="Owner; always NULL since there is no authentication",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this paste was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this paste was last updated (UTC)",
    )

    # ── Indexes ───────────────────────────────────────────────────────────
    __table_args__ = (
        Index("idx_pastes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Paste(id={self.id}, language='{self.language}', "
            f"is_public={self.is_public}, created_at='{self.created_at}')>"
        )
