"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from backoffice.modules.float_requests.models import FloatRequestStatus
from backoffice.modules.transactions.models import ApprovalStatus


class TokenData(BaseModel):
    account_id: str
    email: str
    role: str


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class AccountLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account_id: str
    email: str
    role: str
    is_reviewer: bool = False


class AccountCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)
    role: str = "sales_agent"
    full_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)


class AccountResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None
    role: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)


class ReviewReasonRequest(BaseModel):
    reason: Optional[str] = None


class TransactionResponse(BaseModel):
    id: str
    agent_id: Optional[str] = None
    transaction_type: str
    amount: Decimal
    currency: str
    recipient_phone: Optional[str] = None
    recipient_name: Optional[str] = None
    status: str
    approval_status: ApprovalStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    escalated_by: Optional[str] = None
    escalated_at: Optional[datetime] = None
    escalation_reason: Optional[str] = None
    commission_amount: Decimal = Decimal("0")
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionSubmitResponse(BaseModel):
    success: bool = True
    data: TransactionResponse


class FloatRequestResponse(BaseModel):
    id: str
    agent_id: str
    amount: Decimal
    currency: str
    reason: str
    urgency: str
    status: FloatRequestStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletResponse(BaseModel):
    id: str
    owner_id: str
    currency: str
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletTopupResponse(BaseModel):
    success: bool = True
    data: WalletResponse


class AllocationResponse(BaseModel):
    id: str
    agent_id: str
    allocated_by: Optional[str] = None
    float_request_id: Optional[str] = None
    amount: Decimal
    currency: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AllocationResultResponse(BaseModel):
    success: bool = True
    message: str = "Float allocated successfully"
    data: Optional[AllocationResponse] = None


class FloatApprovalResponse(BaseModel):
    request: FloatRequestResponse
    wallet: WalletResponse
    allocation: AllocationResponse

    model_config = ConfigDict(from_attributes=True)


class AuditLogResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    old_values: Optional[dict[str, Any]] = None
    new_values: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
    ip_address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AdminStatsResponse(BaseModel):
    transactions_by_status: dict[str, int] = Field(default_factory=dict)
    pending_float_requests: int = 0
    approved_volume_by_currency: dict[str, Decimal] = Field(default_factory=dict)


class CommissionTierResponse(BaseModel):
    min_amount: Decimal
    max_amount: Optional[Decimal] = None
    percentage: Decimal
    label: str

    model_config = ConfigDict(from_attributes=True)


class CommissionResponse(BaseModel):
    agent_id: str
    volume: Decimal
    rate: Decimal
    estimated_commission: Decimal = Decimal("0")
    tier: CommissionTierResponse
    next_tier: Optional[CommissionTierResponse] = None
    progress: Decimal = Decimal("100")
    remaining: Decimal = Decimal("0")


class TransactionEmailRequest(BaseModel):
    email: str = Field(..., min_length=3)
    full_name: str = Field(..., alias="fullName")
    transaction_type: str = Field(..., alias="transactionType")
    amount: Decimal
    currency: str
    recipient_name: Optional[str] = Field(None, alias="recipientName")
    recipient_phone: Optional[str] = Field(None, alias="recipientPhone")
    status: str
    transaction_id: str = Field(..., alias="transactionId")

    model_config = ConfigDict(populate_by_name=True)


class TransactionEmailResponse(BaseModel):
    success: bool = True
    message_id: Optional[str] = Field(None, serialization_alias="messageId")
