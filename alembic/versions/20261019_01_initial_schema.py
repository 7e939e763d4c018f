"""Initial content schema."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "slides",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("caption", sa.Text(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("img", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("img", name="uq_slides_img"),
    )

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("pageid", sa.Integer(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_articles_pageid", "articles", ["pageid"])


def downgrade() -> None:
    op.drop_index("ix_articles_pageid", table_name="articles")
    op.drop_table("articles")
    op.drop_table("slides")
