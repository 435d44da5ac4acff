"""Create pastes table

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  Creates the `pastes` table holding every stored snippet.
How:   PostgreSQL server defaults: gen_random_uuid() for ids,
       CURRENT_TIMESTAMP for both timestamps, true for is_public.

Rollback: downgrade() drops the table (all pastes are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the pastes table and its created_at index."""
    op.create_table(
        "pastes",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Unique paste identifier",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'Untitled'"),
            comment="Paste title; 'Untitled' when left blank",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Paste body, stored trimmed and never empty",
        ),
        sa.Column(
            "language",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'text'"),
            comment="Language value, e.g. python, bash, text",
        ),
        sa.Column(
            "is_public",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("true"),
            comment="Public pastes appear in list and search results",
        ),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            nullable=True,
            comment="Owner; always NULL since there is no authentication",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this paste was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this paste was last updated (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Every list query orders by created_at DESC
    op.create_index(
        "idx_pastes_created_at",
        "pastes",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the pastes table. Destructive: all pastes are lost."""
    op.drop_index("idx_pastes_created_at", table_name="pastes")
    op.drop_table("pastes")
