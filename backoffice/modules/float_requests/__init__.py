"""Float request domain exports"""

from .exceptions import FloatRequestError, FloatRequestNotFoundError, FloatRequestStateError
from .models import URGENCY_LEVELS, FloatRequestInput, FloatRequestRecord, FloatRequestStatus
from .service import FloatApproval, FloatRequestService
from .validation import validate_float_request_input

__all__ = [
    "FloatApproval",
    "FloatRequestError",
    "FloatRequestInput",
    "FloatRequestNotFoundError",
    "FloatRequestRecord",
    "FloatRequestService",
    "FloatRequestStateError",
    "FloatRequestStatus",
    "URGENCY_LEVELS",
    "validate_float_request_input",
]
