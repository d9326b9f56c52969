"""add internal_setting table

Revision ID: 8b4e6d2c0a15
Revises: 3f1c2a9d8e71
Create Date: 2026-09-21 18:40:07.902114

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "8b4e6d2c0a15"
down_revision: str | Sequence[str] | None = "3f1c2a9d8e71"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "internal_setting",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=True),
        sa.Column("section", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_internal_setting")),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("internal_setting")
