from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import jwt

from app.config import get_settings
from app.core.constants import ROLE_ADMIN
from app.core.dates import utc_now
from app.core.exceptions import AuthenticationError, PermissionDenied

_HASH_SCHEME = "pbkdf2_sha256"

# Used only when JWT_SECRET is unset in the local environment; tokens do not
# survive a restart.
_EPHEMERAL_SECRET = secrets.token_urlsafe(32)


@dataclass(frozen=True)
class Identity:
    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, *, rounds: Optional[int] = None) -> str:
    if rounds is None:
        rounds = get_settings().PASSWORD_PBKDF2_ROUNDS
    salt = secrets.token_hex(16)
    return "{}${}${}${}".format(_HASH_SCHEME, rounds, salt, _pbkdf2(password, salt, rounds))


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, rounds, salt, expected = password_hash.split("$", 3)
        rounds_value = int(rounds)
    except (AttributeError, ValueError):
        return False
    if scheme != _HASH_SCHEME:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, rounds_value), expected)


def _jwt_secret() -> str:
    settings = get_settings()
    if settings.JWT_SECRET:
        return settings.JWT_SECRET
    if settings.ENVIRONMENT.lower() == "local":
        return _EPHEMERAL_SECRET
    raise RuntimeError("JWT_SECRET must be set outside the local environment.")


def create_access_token(user_id: int, *, role: str, expires_in: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = utc_now()
    if expires_in is None:
        expires_in = timedelta(days=settings.JWT_EXPIRE_DAYS)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + expires_in,
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        payload["iss"] = settings.JWT_ISSUER
    return jwt.encode(payload, _jwt_secret(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require": ["sub", "exp"]}
    try:
        return jwt.decode(
            token,
            _jwt_secret(),
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise AuthenticationError("Invalid or expired token") from exc


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def token_user_id(token: str) -> int:
    payload = decode_access_token(token)
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token subject") from exc


def ensure_admin(identity: Identity) -> Identity:
    if not identity.is_admin:
        raise PermissionDenied("Admin role required")
    return identity


__all__ = [
    "Identity",
    "create_access_token",
    "decode_access_token",
    "ensure_admin",
    "get_bearer_token",
    "hash_password",
    "token_user_id",
    "verify_password",
]
