"""
Client for the hosted authentication provider (Supabase-style ``/auth/v1``).

Resolves bearer tokens to users and looks users up by email with the
service-role key. Constructed explicitly from settings and injected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from pydantic import ValidationError

from umshado.config import Settings
from umshado.exceptions import AuthError, StoreError
from umshado.schemas.auth import AuthUser

logger = logging.getLogger(__name__)

USER_PATH = "/auth/v1/user"
ADMIN_USERS_PATH = "/auth/v1/admin/users"


@dataclass
class AuthProviderClient:
    base_url: str
    anon_key: str
    service_role_key: Optional[str] = None
    timeout: int = 10

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthProviderClient":
        if not settings.supabase_url or not settings.supabase_anon_key:
            logger.error("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
            raise StoreError("Server misconfigured")
        return cls(
            base_url=settings.supabase_url.rstrip("/"),
            anon_key=settings.supabase_anon_key,
            service_role_key=settings.supabase_service_role_key,
            timeout=settings.auth_timeout_seconds,
        )

    def get_user(self, token: str) -> AuthUser:
        """Resolve a bearer token; raises AuthError when the session is invalid."""
        try:
            resp = requests.get(
                f"{self.base_url}{USER_PATH}",
                headers={"Authorization": f"Bearer {token}", "apikey": self.anon_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Auth provider unreachable: %s", e)
            raise AuthError("Invalid session") from e

        if resp.status_code != 200:
            raise AuthError("Invalid session")
        try:
            return AuthUser.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise AuthError("Invalid session") from e

    def find_user_id_by_email(self, email: str) -> Optional[str]:
        """
        Return the auth user id for ``email`` or None.

        Uses the admin API's email filter and matches exactly; raises
        ``requests.RequestException`` on transport errors.
        """
        if not self.service_role_key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
        wanted = email.strip().lower()
        resp = requests.get(
            f"{self.base_url}{ADMIN_USERS_PATH}",
            params={"filter": wanted, "page": 1, "per_page": 50},
            headers={
                "Authorization": f"Bearer {self.service_role_key}",
                "apikey": self.service_role_key,
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        for user in resp.json().get("users", []):
            if (user.get("email") or "").lower() == wanted:
                return user.get("id")
        return None
