# db/models.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Date, DateTime, Index
from dailylog.core.database import Base
import uuid


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class Log(Base):
    __tablename__ = 'logs'

    id         = Column(String(36), primary_key=True, default=generate_uuid)
    content    = Column(Text, nullable=False)
    date       = Column(Date, nullable=False)
    timestamp  = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_logs_timestamp', 'timestamp'),
    )

    def __repr__(self):
        return f"<Log id={self.id} date={self.date}>"
