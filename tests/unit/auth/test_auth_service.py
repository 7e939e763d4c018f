import json
from datetime import timedelta, timezone, datetime

import jwt
import pytest

from src.cms.auth.auth_service import (
    AccountCredential,
    AuthService,
    InvalidCredentialsError,
    InvalidTokenError,
    LoginThrottledError,
    TokenExpiredError,
    hash_password,
)


def build_service() -> AuthService:
    return AuthService(
        credentials={
            "serg": AccountCredential(
                username="serg", password_hash=hash_password("secret"), type="admin"
            ),
            "anna": AccountCredential(
                username="anna", password_hash=hash_password("reader"), type="user"
            ),
        },
        signing_key="test-key",
        token_ttl=timedelta(hours=1),
    )


def test_authenticate_returns_token_for_valid_credentials() -> None:
    service = build_service()

    token, expires_in = service.authenticate("serg", "secret")

    assert expires_in == 3600
    payload = jwt.decode(token, "test-key", algorithms=["HS256"])
    assert payload["sub"] == "serg"
    assert payload["type"] == "admin"


def test_authenticate_raises_for_invalid_password() -> None:
    service = build_service()

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("serg", "wrong")


def test_authenticate_rejects_disabled_account() -> None:
    service = build_service()
    service.credentials["serg"].disabled = True

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("serg", "secret")


def test_authenticate_blocks_after_too_many_failures() -> None:
    service = build_service()

    for _ in range(service.max_failures):
        with pytest.raises(InvalidCredentialsError):
            service.authenticate("serg", "wrong")

    with pytest.raises(LoginThrottledError):
        service.authenticate("serg", "secret")

    # simulate block expiry
    state = service._failed_logins["serg"]  # type: ignore[attr-defined]
    state.blocked_until = datetime.now(timezone.utc) - timedelta(seconds=1)

    token, _ = service.authenticate("serg", "secret")
    assert token


def test_validate_token_returns_principal() -> None:
    service = build_service()
    admin_token, _ = service.authenticate("serg", "secret")
    user_token, _ = service.authenticate("anna", "reader")

    admin = service.validate_token(admin_token)
    user = service.validate_token(user_token)

    assert admin.username == "serg"
    assert admin.is_admin is True
    assert user.type == "user"
    assert user.is_admin is False


def test_validate_token_rejects_foreign_signature() -> None:
    service = build_service()
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "serg", "type": "admin", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        "other-key",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        service.validate_token(token)


def test_validate_token_rejects_unknown_type() -> None:
    service = build_service()
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "serg", "type": "root", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        "test-key",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        service.validate_token(token)


def test_validate_token_reports_expiry() -> None:
    service = build_service()
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {"sub": "serg", "type": "admin", "iat": int(issued.timestamp()), "exp": int((issued + timedelta(hours=1)).timestamp())},
        "test-key",
        algorithm="HS256",
    )

    with pytest.raises(TokenExpiredError):
        service.validate_token(token)


def test_from_file_loads_accounts(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(
        json.dumps(
            {
                "accounts": [
                    {"username": "serg", "password_hash": hash_password("secret"), "type": "admin"},
                    {"username": "anna", "password_hash": hash_password("reader")},
                ]
            }
        ),
        encoding="utf-8",
    )

    service = AuthService.from_file(path, signing_key="test-key", token_ttl_hours=2)

    assert service.token_ttl == timedelta(hours=2)
    assert service.credentials["serg"].type == "admin"
    assert service.credentials["anna"].type == "user"


def test_from_file_rejects_unknown_account_type(tmp_path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(
        json.dumps({"accounts": [{"username": "x", "password_hash": "y", "type": "root"}]}),
        encoding="utf-8",
    )

    with pytest.raises(ValueError):
        AuthService.from_file(path, signing_key="test-key", token_ttl_hours=1)


def test_from_file_requires_existing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        AuthService.from_file(tmp_path / "missing.json", signing_key="k", token_ttl_hours=1)
