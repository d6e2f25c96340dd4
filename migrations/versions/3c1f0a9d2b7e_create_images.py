"""create images

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2022-08-26 13:40:44.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the images table and its sorting index."""
    op.create_table(
        "images",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("filename", sa.String(length=200), nullable=False),
        sa.Column("hash", sa.String(length=20), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sorting", sa.Float(), nullable=False, server_default="0.5"),
        sa.Column("confidence", sa.Float(), nullable=False, server_default="0"),
        sa.CheckConstraint("upvotes >= 0", name="ck_images_upvotes_nonnegative"),
        sa.CheckConstraint("downvotes >= 0", name="ck_images_downvotes_nonnegative"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("hash"),
    )
    op.create_index("ix_images_sorting", "images", ["sorting"])


def downgrade() -> None:
    """Drop the images table."""
    op.drop_index("ix_images_sorting", table_name="images")
    op.drop_table("images")
