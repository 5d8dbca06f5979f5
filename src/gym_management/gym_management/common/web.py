"""Flask glue shared by the feature controllers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict

from flask import jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import ConflictError, DomainError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "authentication": 401,
    "authorization": 403,
    "not_found": 404,
    "conflict": 409,
    "infrastructure": 500,
}


def error_response(exc: DomainError):
    status = STATUS_BY_KIND.get(exc.kind, 400)
    if status >= 500:
        logger.error("request %s %s failed: %s", request.method, request.path, exc)
        return jsonify({"error": "Internal error, please try again later", "kind": exc.kind}), status

    payload: Dict[str, Any] = {"error": str(exc), "kind": exc.kind}
    if isinstance(exc, ValidationError) and exc.field_errors:
        payload["fields"] = exc.field_errors
    if isinstance(exc, ConflictError) and exc.field:
        payload["field"] = exc.field
        payload["value"] = exc.value
    return jsonify(payload), status


def register_error_handlers(app) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return error_response(exc)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description, "kind": "http"}), exc.code
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal error, please try again later", "kind": "infrastructure"}), 500


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_role() -> Role:
    return Role(session["role"])


def current_account_id() -> int:
    return int(session["account_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "account_id" not in session:
            return jsonify({"error": "Please log in to continue", "kind": "authentication"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "account_id" not in session:
                return jsonify({"error": "Please log in to continue", "kind": "authentication"}), 401
            if session.get("role") not in allowed:
                return jsonify({"error": "You do not have permission", "kind": "authorization"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def int_arg(name: str, *, required: bool = True, default=None):
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        if required:
            raise ValidationError(f"Query parameter '{name}' is required")
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer")
