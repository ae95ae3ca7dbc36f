# dailylog/api/logs.py
from fastapi import APIRouter, Depends, status
from typing import List
import logging

from sqlalchemy.orm import Session
from dailylog.core.database import get_db
from dailylog.db import db_access
from dailylog.models.log import LogCreate, LogUpdate, LogDelete, LogEntry, DeleteResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/logs", tags=["Logs"])


@router.get("", response_model=List[LogEntry])
def get_logs(db: Session = Depends(get_db)):
    """Get all logs, newest first."""
    logs = db_access.list_logs(db)
    logger.debug(f"Returning {len(logs)} logs")
    return logs


@router.post("", response_model=LogEntry, status_code=status.HTTP_201_CREATED)
def create_log(log: LogCreate, db: Session = Depends(get_db)):
    """Create a new log."""
    return db_access.create_log(db, log)


@router.put("", response_model=LogEntry)
def update_log(update: LogUpdate, db: Session = Depends(get_db)):
    """Update the content and/or date of an existing log."""
    return db_access.update_log(db, update)


@router.delete("", response_model=DeleteResponse)
def delete_log(body: LogDelete, db: Session = Depends(get_db)):
    """
    Delete a log.

    Deletion is idempotent: an id that does not exist gets the same success
    message as one that did.
    """
    db_access.delete_log(db, body.id)
    return {"message": "Log deleted successfully"}
