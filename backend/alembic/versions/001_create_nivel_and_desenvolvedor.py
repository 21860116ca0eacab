"""Create nivel and desenvolvedor tables

Revision ID: 001
Revises: None
Create Date: 2024-09-02 00:00:00.000000+00:00

What:  Creates the level table and the developer table referencing it.

The level table has no stored developer counter; counts are computed
on read.

Rollback: downgrade() drops both tables (destructive, all data lost).
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
    op.create_table(
        "nivel",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nivel", sa.Text(), nullable=False, comment="Display label of the level"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "desenvolvedor",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.Text(), nullable=False),
        sa.Column("sexo", sa.Text(), nullable=False),
        sa.Column("data_nascimento", sa.Date(), nullable=False),
        # Written at create/update time: current_year - birth_year
        sa.Column("idade", sa.Integer(), nullable=False),
        sa.Column("hobby", sa.Text(), nullable=False),
        sa.Column("nivel_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["nivel_id"], ["nivel.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_index(
        "ix_desenvolvedor_nivel_id",
        "desenvolvedor",
        ["nivel_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_desenvolvedor_nivel_id", table_name="desenvolvedor")
    op.drop_table("desenvolvedor")
    op.drop_table("nivel")
