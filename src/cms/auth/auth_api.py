"""Authentication API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from ..api.errors import unauthorized_error
from .auth_dependencies import get_auth_service
from .auth_service import AuthService, InvalidCredentialsError, LoginThrottledError

router = APIRouter(prefix="/api", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


def _client_ip(request: Request) -> str | None:
    if request.client:
        return request.client.host
    return None


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    try:
        token, expires_in = service.authenticate(
            username=payload.username,
            password=payload.password,
            client_ip=_client_ip(request),
        )
    except LoginThrottledError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc)
        ) from exc
    except InvalidCredentialsError as exc:
        raise unauthorized_error("Invalid username or password.") from exc
    return LoginResponse(access_token=token, expires_in=expires_in)
