"""Float request domain exceptions."""


class FloatRequestError(Exception):
    """Base class for float request errors."""


class FloatRequestNotFoundError(FloatRequestError):
    """Raised when a float request does not exist."""


class FloatRequestStateError(FloatRequestError):
    """Raised when a request is no longer pending."""

    def __init__(self, request_id: str, current: str) -> None:
        super().__init__(f"Float request {request_id} is already {current}")
        self.request_id = request_id
        self.current = current
