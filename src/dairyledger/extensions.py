"""Flask wiring: application context access and JSON error handlers."""

from __future__ import annotations

from datetime import date
from typing import Any

from flask import Flask, current_app, jsonify, request

from . import errors
from .context import AppContext
from .errors import (
    AuthorizationError,
    DairyLedgerError,
    NoRateConfiguredError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .logging_config import get_logger
from .services.validation import parse_date

logger = get_logger("extensions")

EXTENSION_KEY = "dairyledger"

_STATUS = (
    (ValidationError, 422),
    (NoRateConfiguredError, 422),
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (StoreError, 500),
)


def init_app(app: Flask, ctx: AppContext) -> None:
    """Attach the application context and error handlers to ``app``."""

    app.extensions[EXTENSION_KEY] = ctx

    @app.errorhandler(DairyLedgerError)
    def _handle_domain_error(exc: DairyLedgerError):
        status = next((code for kind, code in _STATUS if isinstance(exc, kind)), 400)
        if status >= 500:
            logger.error("Request failed", extra={"path": request.path, "error": exc.message})
        return jsonify(exc.to_dict()), status


def get_context() -> AppContext:
    """Return the ``AppContext`` bound to the current Flask app."""

    return current_app.extensions[EXTENSION_KEY]


def json_body() -> dict[str, Any]:
    """Request JSON as a dict; anything else is a validation failure."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError.single("body", errors.INVALID_TYPE, "Request body must be a JSON object")
    return payload


def query_date(name: str, *, default: date | None = None) -> date:
    """Parse an ISO date query parameter."""

    raw = request.args.get(name)
    if raw is None:
        if default is not None:
            return default
        raise ValidationError.single(name, errors.REQUIRED, f"{name} is required")
    value = parse_date(raw)
    if value is None:
        raise ValidationError.single(name, errors.INVALID_DATE, "Enter a valid date (YYYY-MM-DD)")
    return value


def query_int(name: str, *, default: int | None = None) -> int:
    raw = request.args.get(name)
    if raw is None:
        if default is not None:
            return default
        raise ValidationError.single(name, errors.REQUIRED, f"{name} is required")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError.single(name, errors.INVALID_TYPE, f"{name} must be a whole number") from exc


def query_optional_int(name: str) -> int | None:
    """Like ``query_int`` but absent means ``None``; a malformed value is still an error."""

    if request.args.get(name) is None:
        return None
    return query_int(name)
