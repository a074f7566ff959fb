"""Transaction domain specific exceptions."""


class TransactionError(Exception):
    """Base class for transaction domain errors."""


class TransactionNotFoundError(TransactionError):
    """Raised when the requested transaction does not exist."""


class InvalidTransitionError(TransactionError):
    """Raised when a review action is not allowed from the current approval status."""

    def __init__(self, transaction_id: str, current: str, target: str) -> None:
        super().__init__(f"Transaction {transaction_id} cannot move from {current} to {target}")
        self.transaction_id = transaction_id
        self.current = current
        self.target = target


class ReasonRequiredError(TransactionError):
    """Raised when a rejection or escalation is submitted without a reason."""
