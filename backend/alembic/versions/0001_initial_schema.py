"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the helpdesk tables: profiles, auth_sessions, requests.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ("user", "it_member", "admin")
REQUEST_TYPES = ("incident", "order")
PRIORITIES = ("basse", "moyenne", "urgente")
STATUSES = ("ouvert", "en_cours", "termine")


def upgrade() -> None:
    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("profile_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("service", sa.String(100), nullable=False),
        sa.Column("role", sa.Enum(*ROLES, name="role"), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- auth_sessions ---
    op.create_table(
        "auth_sessions",
        sa.Column("session_id", sa.String(36), primary_key=True),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.profile_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- requests ---
    op.create_table(
        "requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.profile_id"), nullable=False),
        sa.Column("type", sa.Enum(*REQUEST_TYPES, name="requesttype"), nullable=False),
        sa.Column("category", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("priority", sa.Enum(*PRIORITIES, name="priority"), nullable=False, server_default="basse"),
        sa.Column("service_demandeur", sa.String(100), nullable=False),
        sa.Column("status", sa.Enum(*STATUSES, name="requeststatus"), nullable=False, server_default="ouvert"),
        sa.Column("assigned_to", sa.String(36), sa.ForeignKey("profiles.profile_id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "(status = 'ouvert' AND assigned_to IS NULL) OR (status != 'ouvert' AND assigned_to IS NOT NULL)",
            name="ck_requests_assignee_matches_status",
        ),
        sa.CheckConstraint(
            "(status = 'termine' AND closed_at IS NOT NULL) OR (status != 'termine' AND closed_at IS NULL)",
            name="ck_requests_closed_at_matches_status",
        ),
    )
    op.create_index("ix_requests_created_at", "requests", ["created_at"])
    op.create_index("ix_requests_user_id", "requests", ["user_id"])
    op.create_index("ix_requests_assigned_to", "requests", ["assigned_to"])


def downgrade() -> None:
    op.drop_index("ix_requests_assigned_to", table_name="requests")
    op.drop_index("ix_requests_user_id", table_name="requests")
    op.drop_index("ix_requests_created_at", table_name="requests")
    op.drop_table("requests")
    op.drop_table("auth_sessions")
    op.drop_table("profiles")
    sa.Enum(name="requeststatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="priority").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="requesttype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="role").drop(op.get_bind(), checkfirst=True)
