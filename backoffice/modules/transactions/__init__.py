"""Transaction domain exports"""

from .exceptions import (
    InvalidTransitionError,
    ReasonRequiredError,
    TransactionError,
    TransactionNotFoundError,
)
from .models import (
    TRANSACTION_TYPES,
    ApprovalStatus,
    TransactionInput,
    TransactionRecord,
    can_transition,
)
from .service import TransactionService
from .validation import validate_transaction_input

__all__ = [
    "ApprovalStatus",
    "InvalidTransitionError",
    "ReasonRequiredError",
    "TRANSACTION_TYPES",
    "TransactionError",
    "TransactionInput",
    "TransactionNotFoundError",
    "TransactionRecord",
    "TransactionService",
    "can_transition",
    "validate_transaction_input",
]
