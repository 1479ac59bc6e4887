"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Wrapped actions never
raise, so these only cover adapter-level failures (unknown action, bad
request body, framework HTTP errors, bugs). Every response uses the same
envelope shape as pipeline errors.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from policy_gate.core.config import get_settings
from policy_gate.domain.exceptions import PolicyGateException
from policy_gate.shared.utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "ACTION_NOT_FOUND": 404,
    "DUPLICATE_ACTION": 500,
    "SERVICE_UNAVAILABLE": 503,
    "TRANSACTION_STATE_ERROR": 500,
}


def _envelope(
    code: str,
    message: str,
    details: Any = None,
    diagnostics: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "code": code,
        "message": message,
        "errorCode": None,
        "details": details,
        "timestamp": utc_now_iso(),
    }
    if diagnostics:
        body["diagnostics"] = diagnostics
    return body


def _policy_gate_exception_handler(request: Request, exc: PolicyGateException) -> JSONResponse:
    """Return the exception as an error envelope with the mapped status."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    action = exc.details.get("action")
    return JSONResponse(
        status_code=status,
        content=_envelope(exc.error_code, exc.message, details=action),
    )


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 when the request body is not a JSON object of args."""
    return JSONResponse(
        status_code=422,
        content=_envelope(
            "REQUEST_VALIDATION_FAILED",
            "Request validation failed",
            diagnostics={"errors": jsonable_encoder(exc.errors())},
        ),
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope("HTTP_ERROR", str(exc.detail)),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; raw detail only outside production."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    diagnostics = None if settings.is_production else {"originalError": str(exc)}
    return JSONResponse(
        status_code=500,
        content=_envelope("SYSTEM_ERROR", "Internal server error", diagnostics=diagnostics),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PolicyGateException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PolicyGateException, _policy_gate_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
