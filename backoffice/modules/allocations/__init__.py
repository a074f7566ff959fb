"""Float allocation domain exports"""

from .exceptions import AgentNotFoundError, AllocationError
from .models import AllocationInput, AllocationRecord
from .service import AllocationService
from .validation import validate_allocation_input

__all__ = [
    "AgentNotFoundError",
    "AllocationError",
    "AllocationInput",
    "AllocationRecord",
    "AllocationService",
    "validate_allocation_input",
]
