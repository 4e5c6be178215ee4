"""Pydantic schemas for connects.

Learn: pin_1 is the anchor, pin_2 the ordered member list. On update,
omitted (or empty) name/pin_1/pin_2 keep their stored values, but show
is always required; there is no "leave visibility alone" option.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class ConnectRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    pin_1: uuid.UUID
    pin_2: list[uuid.UUID]
    show: bool

    model_config = {"from_attributes": True}


class ConnectCreate(BaseModel):
    name: str = Field(default="", max_length=255)
    pin_1: Optional[uuid.UUID] = None
    pin_2: list[uuid.UUID] = Field(default_factory=list)
    show: bool = False


class ConnectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    pin_1: Optional[uuid.UUID] = None
    pin_2: Optional[list[uuid.UUID]] = None
    show: bool
