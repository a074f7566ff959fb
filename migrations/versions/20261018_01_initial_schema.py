"""initial back-office schema

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(15, 2)


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=100)),
        sa.Column("phone", sa.String(length=20)),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="sales_agent"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("agent_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column("transaction_type", sa.String(length=30), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("recipient_phone", sa.String(length=20)),
        sa.Column("recipient_name", sa.String(length=100)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("approval_status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("approved_by", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column("approved_at", sa.DateTime(timezone=True)),
        sa.Column("rejection_reason", sa.Text()),
        sa.Column("escalated_by", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column("escalated_at", sa.DateTime(timezone=True)),
        sa.Column("escalation_reason", sa.Text()),
        sa.Column("commission_amount", MONEY, server_default="0"),
        sa.Column("metadata", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="transactions_amount_positive"),
        sa.CheckConstraint(
            "approval_status IN ('pending', 'approved', 'rejected', 'escalated')",
            name="transactions_approval_status_valid",
        ),
    )
    op.create_index("ix_transactions_agent_id", "transactions", ["agent_id"])
    op.create_index("ix_transactions_approval_status", "transactions", ["approval_status"])

    op.create_table(
        "wallets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("balance", MONEY, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "currency", name="wallets_user_currency_key"),
        sa.CheckConstraint("balance >= 0", name="wallets_balance_non_negative"),
    )
    op.create_index("ix_wallets_user_id", "wallets", ["user_id"])

    op.create_table(
        "float_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("agent_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="SSP"),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("urgency", sa.String(length=10), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("reviewed_by", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column("reviewed_at", sa.DateTime(timezone=True)),
        sa.Column("rejection_reason", sa.Text()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="float_requests_amount_positive"),
        sa.CheckConstraint("urgency IN ('low', 'medium', 'high', 'critical')", name="float_requests_urgency_valid"),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="float_requests_status_valid"),
    )
    op.create_index("ix_float_requests_agent_id", "float_requests", ["agent_id"])
    op.create_index("ix_float_requests_status", "float_requests", ["status"])

    op.create_table(
        "float_allocations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("agent_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("allocated_by", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column(
            "float_request_id",
            sa.String(length=36),
            sa.ForeignKey("float_requests.id", ondelete="SET NULL"),
        ),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="float_allocations_amount_positive"),
    )
    op.create_index("ix_float_allocations_agent_id", "float_allocations", ["agent_id"])
    op.create_index("ix_float_allocations_float_request_id", "float_allocations", ["float_request_id"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id", ondelete="SET NULL")),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=36)),
        sa.Column("old_values", sa.JSON()),
        sa.Column("new_values", sa.JSON()),
        sa.Column("ip_address", sa.String(length=45)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_entity_type", "audit_logs", ["entity_type"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("float_allocations")
    op.drop_table("float_requests")
    op.drop_table("wallets")
    op.drop_table("transactions")
    op.drop_table("accounts")
