"""Create persons table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `persons` table and the lookup index on email.
How:   BIGINT identity primary key (INTEGER on SQLite so it autoincrements),
       TIMESTAMP WITH TIME ZONE for created_at.

Rollback: downgrade() drops the table entirely (all person data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the persons table with its columns and indexes."""
    op.create_table(
        "persons",

        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("firstname", sa.String(255), nullable=False),
        sa.Column("lastname", sa.String(255), nullable=False),

        # Optional and not unique
        sa.Column("email", sa.String(255), nullable=True),

        # Stamped once on insert, never updated
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_persons_email", "persons", ["email"])


def downgrade() -> None:
    """Drop the persons table."""
    op.drop_index("idx_persons_email", table_name="persons")
    op.drop_table("persons")
