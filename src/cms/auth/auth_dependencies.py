"""Common authentication dependencies for FastAPI routers."""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from ..api.errors import unauthorized_error
from .auth_service import AuthService, InvalidTokenError, Principal, TokenExpiredError

security = HTTPBearer(auto_error=False)

logger = structlog.get_logger(__name__)


def get_auth_service(request: Request) -> AuthService:
    try:
        return request.app.state.auth_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("AuthService is not configured") from exc


def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> Principal | None:
    """Return the caller's principal, or ``None`` for anonymous readers."""
    if credentials is None:
        return None
    try:
        return service.validate_token(credentials.credentials)
    except TokenExpiredError as exc:
        raise unauthorized_error("Token expired.") from exc
    except InvalidTokenError as exc:
        raise unauthorized_error("Invalid token.") from exc


def require_admin(
    request: Request,
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    if principal is None:
        raise unauthorized_error()
    if not principal.is_admin:
        logger.warning(
            "auth.security.admin_required",
            username=principal.username,
            type=principal.type,
            method=request.method,
            path=request.url.path,
        )
        raise unauthorized_error()
    return principal


__all__ = ["get_auth_service", "get_principal", "require_admin"]
