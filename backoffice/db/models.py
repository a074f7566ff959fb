"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backoffice.infrastructure.database.base import Base

MONEY = Numeric(15, 2, asdecimal=True)


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(100))
    phone = Column(String(20))
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="sales_agent")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="transactions_amount_positive"),
        CheckConstraint(
            "approval_status IN ('pending', 'approved', 'rejected', 'escalated')",
            name="transactions_approval_status_valid",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    agent_id = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"), index=True)
    transaction_type = Column(String(30), nullable=False)
    amount = Column(MONEY, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    recipient_phone = Column(String(20))
    recipient_name = Column(String(100))
    status = Column(String(20), nullable=False, default="pending")
    approval_status = Column(String(20), nullable=False, default="pending", index=True)
    approved_by = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"))
    approved_at = Column(DateTime(timezone=True))
    rejection_reason = Column(Text)
    escalated_by = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"))
    escalated_at = Column(DateTime(timezone=True))
    escalation_reason = Column(Text)
    commission_amount = Column(MONEY, default=0)
    metadata_ = Column("metadata", JSON, default=dict)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    agent = relationship("Account", foreign_keys=[agent_id])


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (
        UniqueConstraint("user_id", "currency", name="wallets_user_currency_key"),
        CheckConstraint("balance >= 0", name="wallets_balance_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    currency = Column(String(3), nullable=False)
    balance = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("Account")


class FloatRequest(Base):
    __tablename__ = "float_requests"
    __table_args__ = (
        CheckConstraint("amount > 0", name="float_requests_amount_positive"),
        CheckConstraint(
            "urgency IN ('low', 'medium', 'high', 'critical')",
            name="float_requests_urgency_valid",
        ),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="float_requests_status_valid",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    agent_id = Column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    currency = Column(String(3), nullable=False, default="SSP")
    reason = Column(Text, nullable=False)
    urgency = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    reviewed_by = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime(timezone=True))
    rejection_reason = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    agent = relationship("Account", foreign_keys=[agent_id])


class FloatAllocation(Base):
    __tablename__ = "float_allocations"
    __table_args__ = (
        CheckConstraint("amount > 0", name="float_allocations_amount_positive"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    agent_id = Column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    allocated_by = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"))
    float_request_id = Column(String(36), ForeignKey("float_requests.id", ondelete="SET NULL"), index=True)
    amount = Column(MONEY, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    float_request = relationship("FloatRequest")


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("accounts.id", ondelete="SET NULL"), index=True)
    action = Column(String(50), nullable=False)
    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(36))
    old_values = Column(JSON)
    new_values = Column(JSON)
    ip_address = Column(String(45))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
