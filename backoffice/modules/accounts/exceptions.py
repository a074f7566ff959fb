"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with a duplicate email."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class InvalidRoleError(AccountError):
    """Raised when a role outside the known set is assigned."""


class AccountPermissionError(AccountError):
    """Raised when the acting account may not grant the requested role."""
