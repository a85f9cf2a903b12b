"""Shared base for SQLModel domain entities"""

import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass


def generate_uuid() -> str:
    """Generate a string primary key"""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Timezone-aware current UTC time; timestamp columns are timezone-aware"""
    return datetime.now(timezone.utc)
