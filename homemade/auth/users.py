from __future__ import annotations

import uuid
from typing import Any

import bcrypt

from ..exceptions import ConflictError
from ..listings.store import create_profile

_users: dict[str, dict[str, Any]] = {}


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=10)).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(
    name: str,
    email: str,
    password_hash: str,
    role: str = "seller",
    **profile_fields: Any,
) -> dict[str, Any]:
    """Create a user and its seller profile together.

    Raises ``ConflictError`` when the email is already registered.
    """
    key = _normalize_email(email)
    if key in _users:
        raise ConflictError("User already exists")
    user = {
        "id": uuid.uuid4().hex,
        "name": name,
        "email": key,
        "password_hash": password_hash,
        "role": role,
    }
    _users[key] = user
    create_profile(user["id"], **profile_fields)
    return user


def register_user(name: str, email: str, password: str, **profile_fields: Any) -> dict[str, Any]:
    return create_user(name, email, hash_password(password), **profile_fields)


def get_user(user_id: str) -> dict[str, Any] | None:
    for user in _users.values():
        if user["id"] == user_id:
            return user
    return None


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the session payload or ``None``."""
    record = _users.get(_normalize_email(email))
    if record and _verify_password(password, record["password_hash"]):
        return {
            "id": record["id"],
            "name": record["name"],
            "email": record["email"],
            "role": record["role"],
        }
    return None


def clear_users() -> None:
    _users.clear()
