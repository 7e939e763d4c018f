"""Account authentication and JWT issuance."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError
import structlog


logger = structlog.get_logger(__name__)

ADMIN_TYPE = "admin"
USER_TYPE = "user"
ACCOUNT_TYPES = frozenset({ADMIN_TYPE, USER_TYPE})


def _utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


def hash_password(value: str) -> str:
    """Return hex sha256 hash for the provided password."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


@dataclass(slots=True, frozen=True)
class Principal:
    """Authenticated caller as seen by the content routers."""

    username: str
    type: str

    @property
    def is_admin(self) -> bool:
        return self.type == ADMIN_TYPE


@dataclass(slots=True)
class AccountCredential:
    """Single account record loaded from the credentials file."""

    username: str
    password_hash: str
    type: str = USER_TYPE
    disabled: bool = False

    def verify(self, password: str) -> bool:
        return not self.disabled and self.password_hash == hash_password(password)


@dataclass(slots=True)
class FailedLoginState:
    """Tracks consecutive failures and throttle window per username."""

    failures: int = 0
    blocked_until: datetime | None = None


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidCredentialsError(AuthError):
    """Raised when username/password mismatch."""


class LoginThrottledError(AuthError):
    """Raised when user hit throttle limit."""


class InvalidTokenError(AuthError):
    """Raised when token cannot be decoded."""


class TokenExpiredError(AuthError):
    """Raised when token is expired."""


@dataclass(slots=True)
class AuthService:
    """Authenticate configured accounts and issue JWT tokens."""

    credentials: dict[str, AccountCredential]
    signing_key: str
    token_ttl: timedelta
    max_failures: int = 10
    block_duration: timedelta = timedelta(minutes=15)
    _failed_logins: dict[str, FailedLoginState] = field(default_factory=dict)

    @classmethod
    def from_file(
        cls,
        path: Path,
        signing_key: str,
        token_ttl_hours: int,
    ) -> "AuthService":
        credentials = cls._load_credentials(path)
        ttl = timedelta(hours=token_ttl_hours)
        if not signing_key:
            raise RuntimeError("JWT_SIGNING_KEY is not configured")
        return cls(credentials=credentials, signing_key=signing_key, token_ttl=ttl)

    @staticmethod
    def _load_credentials(path: Path) -> dict[str, AccountCredential]:
        if not path.exists():
            raise FileNotFoundError(f"Credentials file not found: {path}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        accounts = raw.get("accounts", [])
        if not isinstance(accounts, list):
            raise ValueError(
                "Invalid credentials structure: 'accounts' must be an array"
            )
        records: dict[str, AccountCredential] = {}
        for entry in accounts:
            username = entry.get("username")
            password_hash = entry.get("password_hash")
            if not username or not password_hash:
                raise ValueError(
                    "Each account entry must contain username and password_hash"
                )
            account_type = entry.get("type", USER_TYPE)
            if account_type not in ACCOUNT_TYPES:
                raise ValueError(f"Unknown account type '{account_type}' for {username}")
            records[username] = AccountCredential(
                username=username,
                password_hash=password_hash,
                type=account_type,
                disabled=entry.get("disabled", False),
            )
        if not records:
            raise ValueError("No accounts configured")
        return records

    def authenticate(
        self, username: str, password: str, client_ip: str | None = None
    ) -> tuple[str, int]:
        """Validate credentials and return JWT token + ttl seconds."""
        now = _utcnow()
        state = self._failed_logins.get(username)
        if state and state.blocked_until and now < state.blocked_until:
            logger.warning(
                "auth.login.failure",
                username=username,
                reason="throttled",
                blocked_until=state.blocked_until.isoformat(),
                client_ip=client_ip,
            )
            raise LoginThrottledError("Too many attempts, try later")

        credential = self.credentials.get(username)
        if not credential or not credential.verify(password):
            self._register_failure(username, now)
            logger.warning(
                "auth.login.failure",
                username=username,
                reason="invalid_credentials",
                client_ip=client_ip,
            )
            raise InvalidCredentialsError("Invalid username or password")

        self._failed_logins.pop(username, None)
        token = self._issue_token(credential, now)
        expires_in = int(self.token_ttl.total_seconds())
        logger.info(
            "auth.login.success",
            username=username,
            type=credential.type,
            client_ip=client_ip,
            expires_in=expires_in,
        )
        return token, expires_in

    def _register_failure(self, username: str, now: datetime) -> None:
        state = self._failed_logins.setdefault(username, FailedLoginState())
        state.failures += 1
        if state.failures >= self.max_failures:
            state.failures = 0
            state.blocked_until = now + self.block_duration
        else:
            state.blocked_until = None

    def _issue_token(self, credential: AccountCredential, issued_at: datetime) -> str:
        payload: dict[str, Any] = {
            "sub": credential.username,
            "type": credential.type,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_ttl).timestamp()),
        }
        return jwt.encode(payload, self.signing_key, algorithm="HS256")

    def validate_token(self, token: str) -> Principal:
        """Decode JWT and return the principal it describes."""
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=["HS256"],
                options={"require": ["exp", "iat", "sub", "type"]},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        account_type = payload.get("type")
        if account_type not in ACCOUNT_TYPES:
            raise InvalidTokenError("Invalid token")
        return Principal(username=str(payload["sub"]), type=account_type)


__all__ = [
    "ADMIN_TYPE",
    "AccountCredential",
    "AuthService",
    "AuthError",
    "InvalidCredentialsError",
    "LoginThrottledError",
    "InvalidTokenError",
    "Principal",
    "TokenExpiredError",
    "USER_TYPE",
    "hash_password",
]
