"""election tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-09-20 10:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "admin",
        sa.Column("code", sa.String(length=128), primary_key=True, nullable=False),
    )
    op.create_table(
        "mesas",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("code", sa.String(length=64), nullable=False, unique=True),
        sa.Column("code_hash", sa.String(length=200), nullable=True),
    )
    op.create_table(
        "mesa_keys",
        sa.Column("key", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("mesa_id", sa.Integer(), sa.ForeignKey("mesas.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_mesa_keys_mesa_id", "mesa_keys", ["mesa_id"])

    op.create_table(
        "voters",
        sa.Column("dni", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("course", sa.String(length=32), nullable=True),
        sa.Column("otp", sa.String(length=16), nullable=True),
        sa.Column("is_blocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_voted_rep", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_voted_amb", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_voted_per", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_voters_course", "voters", ["course"])

    op.create_table(
        "candidates",
        sa.Column("id", sa.String(length=200), primary_key=True, nullable=False),
        sa.Column("race", sa.String(length=8), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("detail", sa.String(length=200), nullable=True),
        sa.Column("course", sa.String(length=32), nullable=True),
    )
    op.create_index("ix_candidates_race", "candidates", ["race"])

    op.create_table(
        "ballots",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("ballot_id", sa.String(length=64), nullable=False),
        sa.Column("mesa_id", sa.Integer(), sa.ForeignKey("mesas.id"), nullable=False),
        sa.Column("race", sa.String(length=8), nullable=False),
        sa.Column("candidate_id", sa.String(length=200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("audit_hash", sa.String(length=64), nullable=True),
    )
    op.create_index("ix_ballots_ballot_id", "ballots", ["ballot_id"])
    op.create_index("ix_ballots_mesa_id", "ballots", ["mesa_id"])
    op.create_index("ix_ballots_race", "ballots", ["race"])

    op.create_table(
        "ledger",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("ballot_id", sa.String(length=64), nullable=False),
        sa.Column("mesa_id", sa.Integer(), sa.ForeignKey("mesas.id"), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("races", sa.String(length=32), nullable=True),
        sa.Column("audit_hash", sa.String(length=64), nullable=True),
    )
    op.create_index("ix_ledger_mesa_id", "ledger", ["mesa_id"])


def downgrade() -> None:
    op.drop_table("ledger")
    op.drop_table("ballots")
    op.drop_table("candidates")
    op.drop_table("voters")
    op.drop_table("mesa_keys")
    op.drop_table("mesas")
    op.drop_table("admin")
