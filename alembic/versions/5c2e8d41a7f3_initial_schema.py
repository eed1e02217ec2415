"""initial_schema

Crée les sept tables de SISAG : objective, project, project_objective, phase,
maturity_assessment, planning_alert et alert.

Revision ID: 5c2e8d41a7f3
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c2e8d41a7f3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CHECKLIST_COLUMNS = (
    "budget_available",
    "disbursement_planned",
    "funding_source_confirmed",
    "contracts_signed",
    "feasibility_study",
    "technical_plans_validated",
    "documentation_complete",
    "governance_defined",
    "steering_committee_formed",
    "tenders_launched_awarded",
    "project_team_available",
    "logistics_ready",
    "risks_identified",
)


def upgrade() -> None:
    op.create_table(
        "objective",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("sector", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_objective_sector", "objective", ["sector"])

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("sector", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="planned"),
        sa.Column("budget", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("spent", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("province", sa.String(100), nullable=False),
        sa.Column("city", sa.String(100), nullable=False, server_default=""),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        sa.Column("ministry", sa.String(200), nullable=False, server_default=""),
        sa.Column("responsible_person", sa.String(200), nullable=False, server_default=""),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_project_sector", "project", ["sector"])
    op.create_index("ix_project_province", "project", ["province"])

    op.create_table(
        "project_objective",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id", sa.Integer(),
            sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "objective_id", sa.Integer(),
            sa.ForeignKey("objective.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("weight", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("project_id", "objective_id", name="uq_project_objective"),
    )
    op.create_index("ix_project_objective_project_id", "project_objective", ["project_id"])

    op.create_table(
        "phase",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id", sa.Integer(),
            sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("planned_start", sa.Date(), nullable=True),
        sa.Column("planned_end", sa.Date(), nullable=True),
        sa.Column("actual_start", sa.Date(), nullable=True),
        sa.Column("actual_end", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="planned"),
        sa.Column("deliverables", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_phase_project_id", "phase", ["project_id"])

    op.create_table(
        "maturity_assessment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id", sa.Integer(),
            sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False, unique=True,
        ),
        *[
            sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.false())
            for name in _CHECKLIST_COLUMNS
        ],
        sa.Column("pag_alignment_percent", sa.Float(), nullable=False, server_default="0"),
        sa.Column("attachments", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "planning_alert",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id", sa.Integer(),
            sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "phase_id", sa.Integer(),
            sa.ForeignKey("phase.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_planning_alert_project_id", "planning_alert", ["project_id"])

    op.create_table(
        "alert",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id", sa.Integer(),
            sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_alert_project_id", "alert", ["project_id"])


def downgrade() -> None:
    op.drop_index("ix_alert_project_id", table_name="alert")
    op.drop_table("alert")
    op.drop_index("ix_planning_alert_project_id", table_name="planning_alert")
    op.drop_table("planning_alert")
    op.drop_table("maturity_assessment")
    op.drop_index("ix_phase_project_id", table_name="phase")
    op.drop_table("phase")
    op.drop_index("ix_project_objective_project_id", table_name="project_objective")
    op.drop_table("project_objective")
    op.drop_index("ix_project_province", table_name="project")
    op.drop_index("ix_project_sector", table_name="project")
    op.drop_table("project")
    op.drop_index("ix_objective_sector", table_name="objective")
    op.drop_table("objective")
