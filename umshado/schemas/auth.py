"""Identity resolved from a bearer token."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class AuthUser(BaseModel):
    id: UUID
    email: Optional[str] = None

    model_config = {"extra": "ignore"}
