import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import validates
from taskhub.core.database import Base
from taskhub.core.errors import ValidationError

REQUIRED_FIELDS = ("name", "description", "author")

def _new_id():
    return uuid.uuid4().hex

def utcnow():
    return datetime.now(timezone.utc)

class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __init__(self, **kwargs):
        missing = [field for field in REQUIRED_FIELDS if field not in kwargs]
        if missing:
            raise ValidationError(error=f"Task validation failed: {', '.join(missing)} is required")
        super().__init__(**kwargs)

    @validates(*REQUIRED_FIELDS)
    def validate_required(self, key, value):
        if not isinstance(value, str) or not value:
            raise ValidationError(error=f"Task validation failed: {key} is required")
        return value
