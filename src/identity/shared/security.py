"""Password hashing and access tokens.

Passwords are hashed with passlib's pbkdf2_sha256. Access tokens are HS256
JWTs (PyJWT) whose subject is the customer id.
"""

import os
import time

import jwt
from passlib.context import CryptContext
from protean.exceptions import ValidationError

_JWT_ALGORITHM = "HS256"
_DEV_SECRET = "luxmall-dev-secret"

MIN_PASSWORD_LENGTH = 6

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def _jwt_secret() -> str:
    return os.getenv("JWT_SECRET", _DEV_SECRET)


def _token_lifetime_seconds() -> int:
    return int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7")) * 24 * 60 * 60


def ensure_password_strength(password) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return _pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Malformed or unknown hash format
        return False


def issue_token(customer_id: str, expires_in: int | None = None) -> str:
    now = int(time.time())
    payload = {
        "sub": str(customer_id),
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else _token_lifetime_seconds()),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm=_JWT_ALGORITHM)


def decode_token(token: str) -> str | None:
    """Return the customer id carried by `token`, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, _jwt_secret(), algorithms=[_JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    return payload.get("sub")
