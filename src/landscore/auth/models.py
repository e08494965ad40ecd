"""Authentication data models."""

from __future__ import annotations

from pydantic import BaseModel

from landscore.core.types import UserRole


class TokenValidation(BaseModel):
    valid: bool
    user_id: str | None = None
    role: UserRole | None = None
