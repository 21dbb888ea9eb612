from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, timezone

class TaskPayload(BaseModel):
    # Presence is checked by the handlers so missing fields map to a 400
    # with the fixed message instead of a schema error.
    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None

class TaskResponse(BaseModel):
    id: str
    name: str
    description: str
    author: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

class TaskCreated(BaseModel):
    task: TaskResponse
    token: str

class MessageResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
