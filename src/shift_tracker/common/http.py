from __future__ import annotations

from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import InternalServerError

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def ok(data: Any = None, *, status: int = 200, **extra: Any):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def json_body() -> dict:
    """The request's JSON object; a body that is not an object reads as empty."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def current_employee_id() -> int:
    """The authenticated employee, as placed in the session by the login layer."""
    if "user_id" not in session:
        raise AuthenticationError("Not authorized to access this route")
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role", Role.EMPLOYEE.value))
    except ValueError:
        return Role.EMPLOYEE


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Not authorized to access this route", 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return fail(str(exc), status_for(exc))

    @app.errorhandler(InternalServerError)
    def handle_internal_error(exc: InternalServerError):
        # Flask has already logged the original exception
        return fail("Internal server error", 500)
