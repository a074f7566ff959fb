"""Exceptions rendered as ``{"success": false, "errors": [...]}`` responses."""


class EnvelopeError(Exception):
    def __init__(self, status_code: int, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.status_code = status_code
        self.errors = list(errors)
