"""FastAPI dependencies resolving the caller from ``Authorization: Bearer``."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from umshado.adapters.auth_provider import AuthProviderClient
from umshado.config import Settings, get_settings
from umshado.exceptions import AuthError, AuthorizationError
from umshado.schemas.auth import AuthUser

BEARER_PREFIX = "Bearer "


def get_auth_client(settings: Settings = Depends(get_settings)) -> AuthProviderClient:
    return AuthProviderClient.from_settings(settings)


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Unauthorized")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthError("Unauthorized")
    return token


def get_current_user(
    token: str = Depends(get_bearer_token),
    client: AuthProviderClient = Depends(get_auth_client),
) -> AuthUser:
    """Resolve the bearer token to a user; 401 on any failure."""
    return client.get_user(token)


def require_admin(
    current_user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    email = (current_user.email or "").lower()
    if not email or email not in settings.admin_email_list:
        raise AuthorizationError("Not authorized")
    return current_user
