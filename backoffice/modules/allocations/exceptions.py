"""Allocation domain exceptions."""


class AllocationError(Exception):
    """Base class for allocation errors."""


class AgentNotFoundError(AllocationError):
    """Raised when allocating to an account that does not exist."""
