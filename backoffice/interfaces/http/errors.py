"""Error envelopes for the validating endpoints.

Endpoints that validate free-form request bodies answer every failure with
``{"success": false, "errors": [...]}`` instead of FastAPI's ``detail`` shape.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from backoffice.core.exceptions import EnvelopeError
from backoffice.modules.common.validation import InputValidationError

logger = logging.getLogger(__name__)


async def read_json_body(request: Request):
    try:
        return await request.json()
    except ValueError as exc:
        raise InputValidationError(["Invalid JSON body"]) from exc


async def _envelope_error_handler(request: Request, exc: EnvelopeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"success": False, "errors": exc.errors})


async def _input_validation_handler(request: Request, exc: InputValidationError) -> JSONResponse:
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "errors": exc.errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EnvelopeError, _envelope_error_handler)
    app.add_exception_handler(InputValidationError, _input_validation_handler)


__all__ = ["EnvelopeError", "read_json_body", "register_exception_handlers"]
