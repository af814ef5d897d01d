"""Initial schema — users, profiles, tasks, payments.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("role", sa.String(10), nullable=False, server_default="User"),
        sa.Column("password_hash", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("slug", sa.String(80), nullable=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("account_number", sa.String(34), nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("photo", sa.String(200), nullable=False, server_default="no-photo.jpg"),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_profiles_slug", "profiles", ["slug"])
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"])
    op.create_index("ix_profiles_lon_lat", "profiles", ["longitude", "latitude"])

    op.create_table(
        "tasks",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("budget", sa.Float, nullable=True),
        sa.Column(
            "profile_id", UUID(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tasks_profile_id", "tasks", ["profile_id"])
    op.create_index("ix_tasks_user_id", "tasks", ["user_id"])

    # task_id is not a foreign key: payments outlive deleted tasks
    op.create_table(
        "payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("task_id", UUID(as_uuid=True), nullable=False),
        sa.Column("task_owner_id", UUID(as_uuid=True), nullable=False),
        sa.Column("reference_id", sa.String(100), nullable=False),
        sa.Column("access_code", sa.String(100), nullable=False),
        sa.Column("amount", sa.Float, nullable=True),
        sa.Column("status", sa.String(10), nullable=False, server_default="Init"),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_task_id", "payments", ["task_id"])
    op.create_index("ix_payments_task_owner_id", "payments", ["task_owner_id"])


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("tasks")
    op.drop_table("profiles")
    op.drop_table("users")
