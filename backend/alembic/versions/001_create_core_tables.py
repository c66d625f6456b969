"""Create users, thoughts and dogs tables

Revision ID: 001
Revises: None
Create Date: 2024-03-01 00:00:00.000000+00:00

What:  Initial schema. Mirrors happythoughts/models/*.py.
Rollback: downgrade() drops all three tables (all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("access_token", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    # Unique: a duplicated token would let one user act as another
    op.create_index("ix_users_access_token", "users", ["access_token"], unique=True)

    op.create_table(
        "thoughts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.String(140), nullable=False),
        sa.Column("hearts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("category", sa.String(20), nullable=False, server_default=sa.text("'happy'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        # Weak reference to users.id: no foreign key
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_thoughts_created_at", "thoughts", [sa.text("created_at DESC")])

    op.create_table(
        "dogs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("breed", sa.String(50), nullable=False),
        sa.Column("color", sa.String(30), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("vaccinated", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("likes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dogs_name", "dogs", ["name"])
    op.create_index("idx_dogs_created_at", "dogs", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_dogs_created_at", table_name="dogs")
    op.drop_index("ix_dogs_name", table_name="dogs")
    op.drop_table("dogs")
    op.drop_index("idx_thoughts_created_at", table_name="thoughts")
    op.drop_table("thoughts")
    op.drop_index("ix_users_access_token", table_name="users")
    op.drop_table("users")
