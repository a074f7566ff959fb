"""Helpers shared by the domain modules."""

from .validation import CURRENCIES, InputValidationError, ensure_reason

__all__ = ["CURRENCIES", "InputValidationError", "ensure_reason"]
