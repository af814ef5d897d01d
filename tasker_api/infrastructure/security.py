"""Security Helpers — bcrypt password hashing and JWT access tokens.

Invariants:
    - Plain passwords never leave this module un-hashed
    - Access tokens carry sub (user id), role, iat, exp
    - Every decode failure surfaces as AuthenticationError
"""

import time
from typing import Any
from uuid import UUID

import bcrypt
import jwt

from tasker_api.core.errors import AuthenticationError


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(
    *, user_id: UUID, role: str, secret: str, algorithm: str, expire_minutes: int,
) -> str:
    issued_at = int(time.time())
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + expire_minutes * 60,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthenticationError()
    try:
        return jwt.decode(raw, secret, algorithms=[algorithm])
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError() from exc
