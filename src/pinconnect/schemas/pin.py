"""Pydantic schemas for pins."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PinRead(BaseModel):
    id: uuid.UUID
    name: str
    user_id: uuid.UUID
    latitude: float
    longitude: float
    created_at: datetime
    edited_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PinWrite(BaseModel):
    """Body for both create and update; a pin update overwrites every field."""

    name: str = Field(..., max_length=255)
    latitude: float
    longitude: float
