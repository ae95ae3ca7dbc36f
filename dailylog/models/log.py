# dailylog/models/log.py
import datetime as dt
from typing   import Optional
from pydantic import BaseModel, Field, field_validator


def _clean_content(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("content must not be empty")
    return value


class LogBase(BaseModel):
    content: str
    date: dt.date

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value):
        return _clean_content(value)


class LogCreate(LogBase):
    timestamp: Optional[dt.datetime] = None

    class Config:
        extra = "ignore"


class LogUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    content: Optional[str] = None
    date: Optional[dt.date] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value):
        return _clean_content(value)


class LogDelete(BaseModel):
    id: str = Field(..., min_length=1)


class LogEntry(LogBase):
    id: str
    timestamp: dt.datetime
    created_at: dt.datetime = Field(serialization_alias="createdAt")
    updated_at: dt.datetime = Field(serialization_alias="updatedAt")

    @field_validator("timestamp", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: dt.datetime) -> dt.datetime:
        # SQLite hands back naive datetimes; everything is stored in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value

    class Config:
        from_attributes = True


class DeleteResponse(BaseModel):
    message: str
