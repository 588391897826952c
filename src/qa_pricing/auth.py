from __future__ import annotations

import hmac
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping

import jwt

from .secret_store import get_secret

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth_token"
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=24)
INTERNAL_ROLE = "internal_team"


class AuthConfigurationError(RuntimeError):
    """Credentials or signing secret are missing on the server."""


@dataclass(frozen=True)
class AuthSettings:
    username: str | None
    password: str | None
    jwt_secret: str | None

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password and self.jwt_secret)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AuthSettings":
        environ = os.environ if environ is None else environ
        return cls(
            username=environ.get("INTERNAL_USER"),
            password=environ.get("INTERNAL_PASS"),
            jwt_secret=environ.get("JWT_SECRET"),
        )

    @classmethod
    def from_secret_manager(cls, project_id: str) -> "AuthSettings":
        """Read credentials from Secret Manager, falling back to the environment."""
        env = cls.from_env()
        return cls(
            username=get_secret(project_id, "internal-user") or env.username,
            password=get_secret(project_id, "internal-pass") or env.password,
            jwt_secret=get_secret(project_id, "jwt-secret") or env.jwt_secret,
        )


def _require_configured(settings: AuthSettings) -> None:
    if not settings.is_configured:
        raise AuthConfigurationError("INTERNAL_USER, INTERNAL_PASS and JWT_SECRET must all be set")


def verify_credentials(settings: AuthSettings, username: str, password: str) -> bool:
    _require_configured(settings)
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.username.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.password.encode("utf-8"))
    return user_ok and pass_ok


def issue_token(settings: AuthSettings, username: str, *, now: datetime | None = None) -> str:
    _require_configured(settings)
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "user": username,
        "role": INTERNAL_ROLE,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_TTL).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=TOKEN_ALGORITHM)


def verify_token(settings: AuthSettings, token: str | None) -> bool:
    """True only for a well-formed, unexpired token signed with our secret."""
    if not token:
        return False
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting auth token")
        return False
    try:
        jwt.decode(token, settings.jwt_secret, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Auth token expired")
        return False
    except jwt.InvalidTokenError as exc:
        logger.info("Auth token rejected", extra={"reason": str(exc)})
        return False
    return True


__all__ = [
    "AUTH_COOKIE_NAME",
    "TOKEN_TTL",
    "AuthConfigurationError",
    "AuthSettings",
    "verify_credentials",
    "issue_token",
    "verify_token",
]
