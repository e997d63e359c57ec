from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class RegisterResponse(BaseModel):
    ok: bool = True
    message: str = "Registered"
    file: str


class ErrorResponse(BaseModel):
    ok: bool = False
    message: str
    missing: Optional[List[str]] = Field(default=None, examples=[["teamName", "usn"]])


class EventInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_key: str = Field(alias="eventKey")
    display_name: str = Field(alias="displayName")
    file: str
    headers: List[str]


class HealthResponse(BaseModel):
    ok: bool = True
