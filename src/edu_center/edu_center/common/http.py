"""JSON request/response helpers shared by every controller."""
from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_response(message: str, data: Any = None, *, status: int = 200):
    payload: dict[str, Any] = {"success": 200 <= status < 300, "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def read_json_body(*, expect: type = dict) -> Any:
    body = request.get_json(silent=True)
    if body is None:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, expect):
        raise ValidationError(f"Request body must be a JSON {'array' if expect is list else 'object'}")
    return body


def require_query_param(name: str) -> str:
    value = (request.args.get(name) or "").strip()
    if not value:
        raise ValidationError(f"{name} parameter is required")
    return value


def optional_query_param(name: str) -> Optional[str]:
    value = (request.args.get(name) or "").strip()
    return value or None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        if isinstance(exc, PersistenceError):
            logger.error("Storage failure on %s %s: %s", request.method, request.path, exc, exc_info=exc)
            return json_response("Internal server error", status=500)

        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                logger.info("%s %s rejected (%s): %s", request.method, request.path, status, exc)
                return json_response(str(exc), status=status)

        logger.warning("Unmapped domain error on %s %s: %s", request.method, request.path, exc)
        return json_response(str(exc), status=400)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return json_response(exc.description or exc.name, status=exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return json_response("Internal server error", status=500)
