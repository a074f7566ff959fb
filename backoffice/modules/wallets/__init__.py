"""Wallet domain exports"""

from .exceptions import WalletError, WalletNotFoundError
from .models import WalletSnapshot, WalletTopupInput
from .service import WalletService
from .validation import validate_topup_input

__all__ = [
    "WalletError",
    "WalletNotFoundError",
    "WalletService",
    "WalletSnapshot",
    "WalletTopupInput",
    "validate_topup_input",
]
