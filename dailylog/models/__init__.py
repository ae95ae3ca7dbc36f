# models/__init__.py
"""
Pydantic models for request/response validation
"""

from .log import (
    LogBase,
    LogCreate,
    LogUpdate,
    LogDelete,
    LogEntry,
    DeleteResponse
)

__all__ = [
    "LogBase",
    "LogCreate",
    "LogUpdate",
    "LogDelete",
    "LogEntry",
    "DeleteResponse"
]
