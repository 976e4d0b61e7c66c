from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import Account


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    """Return the request's JSON object; an absent body counts as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def text_field(data: dict, name: str, default: Optional[str] = "") -> Optional[str]:
    """Read a string field; null or missing gives the default, other types are rejected."""
    value = data.get(name)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be text.")
    return value


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please sign in to continue.", 401)

            if session.get("role") != role.value:
                return json_error("You do not have permission.", 403)

            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
therapist_required = role_required(Role.THERAPIST)


def current_account() -> Account:
    """Rebuild the signed-in account from the Flask session."""
    return Account(
        id=str(session["user_id"]),
        username=str(session.get("username", "")),
        name=str(session.get("name", "")),
        role=Role(session["role"]),
    )


def remember_account(account: Account) -> None:
    session["user_id"] = account.id
    session["username"] = account.username
    session["name"] = account.name
    session["role"] = account.role.value
