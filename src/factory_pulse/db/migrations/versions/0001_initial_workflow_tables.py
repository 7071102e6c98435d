"""Initial projects, supplier quotes and stage history tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("project_id", sa.String(128), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("customer_id", sa.String(128), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("engineering_reviewer_id", sa.String(128), nullable=True),
        sa.Column("qa_reviewer_id", sa.String(128), nullable=True),
        sa.Column("production_reviewer_id", sa.String(128), nullable=True),
        sa.Column("estimated_value", sa.Numeric(14, 2), nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("created_by", sa.String(200), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_projects_customer_id", "projects", ["customer_id"])
    op.create_index("ix_projects_status", "projects", ["status"])

    op.create_table(
        "supplier_quotes",
        sa.Column("quote_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("supplier_name", sa.String(200), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("quote_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("lead_time_days", sa.Integer, nullable=True),
        sa.Column("quote_received_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_supplier_quotes_project_id", "supplier_quotes", ["project_id"])

    op.create_table(
        "project_stage_history",
        sa.Column("history_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("from_stage", sa.String(50), nullable=True),
        sa.Column("to_stage", sa.String(50), nullable=False),
        sa.Column("changed_by", sa.String(200), nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column("bypass_required", sa.Boolean, nullable=False),
        sa.Column("bypass_reason", sa.Text, nullable=True),
        sa.Column("manager_override", sa.Boolean, nullable=False),
        sa.Column("entered_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_project_stage_history_project_id", "project_stage_history", ["project_id"])
    op.create_index("ix_project_stage_history_entered_at", "project_stage_history", ["entered_at"])


def downgrade() -> None:
    op.drop_table("project_stage_history")
    op.drop_table("supplier_quotes")
    op.drop_table("projects")
