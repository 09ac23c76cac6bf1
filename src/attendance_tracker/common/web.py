from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthorizationError,
    ConcurrencyError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import User
from .datetime_utils import now_local, parse_iso_date

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"


def to_json(value: Any) -> Any:
    """Convert dataclasses, enums and dates into JSON-friendly values."""

    if is_dataclass(value) and not isinstance(value, type):
        return {k: to_json(v) for k, v in asdict(value).items()}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def date_arg(name: str, default: Optional[date] = None) -> date:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        if default is None:
            raise ValidationError(f"Query parameter '{name}' is required (YYYY-MM-DD)")
        return default
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be a date (YYYY-MM-DD)") from None


def int_arg(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer") from None


def today() -> date:
    return now_local().date()


def current_user(container) -> User:
    """Resolve the caller from the identity header set by the fronting auth layer."""

    user_id = (request.headers.get(USER_HEADER) or "").strip()
    if not user_id:
        raise AuthorizationError(f"Missing {USER_HEADER} header")
    return container.access_service.get_user(user_id)


def register_error_handlers(app: Flask) -> None:
    status_by_type = [
        (NotFoundError, 404),
        (AuthorizationError, 403),
        (ConcurrencyError, 409),
        (ValidationError, 400),
    ]

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = next((code for exc_type, code in status_by_type if isinstance(exc, exc_type)), 400)
        return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"success": False, "error": exc.name, "message": exc.description}), exc.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "InternalError", "message": "Internal server error"}), 500
