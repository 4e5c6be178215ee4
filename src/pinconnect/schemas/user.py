"""Pydantic schemas for users and auth payloads.

Learn: UserRecord is what repositories hand to AuthService; it carries
the password hash. UserRead is what leaves the service layer. Keep them
separate so a hash can't slip into a response by accident.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserRecord(UserRead):
    """Stored user row, hash included. Never returned by a service."""

    password_hash: str = Field(repr=False)
    deleted_at: Optional[datetime] = None

    def redacted(self) -> UserRead:
        return UserRead(**self.model_dump(include=set(UserRead.model_fields)))


# ─── Request / response bodies ──────────────────────────

class SignupRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str
    name: str = Field(..., max_length=100)


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: UserRead
