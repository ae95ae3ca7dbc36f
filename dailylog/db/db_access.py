# dailylog/db/db_access.py

import logging
from datetime import timezone
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from dailylog.core.exceptions import LogNotFound, LogOperationFailed
from dailylog.models.log import LogCreate, LogUpdate
from .models import Log, utcnow

logger = logging.getLogger(__name__)


def _as_utc(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ------------------------------------------------------------------
# LOG FUNCTIONS
# ------------------------------------------------------------------

def list_logs(db: Session) -> List[Log]:
    """Return every log, newest timestamp first."""
    try:
        return (
            db.query(Log)
            .order_by(Log.timestamp.desc(), Log.created_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error retrieving logs: {e}")
        raise LogOperationFailed("Logs retrieval failed") from e


def create_log(db: Session, data: LogCreate) -> Log:
    """Insert a new log. The id is assigned here, the timestamp defaults to now."""
    log = Log(
        content=data.content,
        date=data.date,
        timestamp=_as_utc(data.timestamp) if data.timestamp else utcnow(),
    )
    db.add(log)

    try:
        db.commit()
        db.refresh(log)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating log: {e}")
        raise LogOperationFailed("Log creation failed") from e

    logger.info(f"Created log {log.id} for {log.date}")
    return log


def update_log(db: Session, data: LogUpdate) -> Log:
    """Change content and/or date of an existing log; id and timestamp stay put."""
    try:
        log = db.get(Log, data.id)
    except SQLAlchemyError as e:
        logger.error(f"Error loading log {data.id}: {e}")
        raise LogOperationFailed("Log update failed") from e

    if log is None:
        logger.warning(f"Update requested for unknown log {data.id}")
        raise LogNotFound("Log not found")

    if data.content is not None:
        log.content = data.content
    if data.date is not None:
        log.date = data.date

    try:
        db.commit()
        db.refresh(log)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating log {data.id}: {e}")
        raise LogOperationFailed("Log update failed") from e

    logger.info(f"Updated log {log.id}")
    return log


def delete_log(db: Session, log_id: str) -> bool:
    """
    Delete a log by id.

    Deleting an id that does not exist is not an error; the return value
    tells whether a row was actually removed.
    """
    try:
        deleted = db.query(Log).filter(Log.id == log_id).delete()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting log {log_id}: {e}")
        raise LogOperationFailed("Log deletion failed") from e

    if deleted:
        logger.info(f"Deleted log {log_id}")
    else:
        logger.info(f"Delete requested for unknown log {log_id}, nothing to do")
    return bool(deleted)
