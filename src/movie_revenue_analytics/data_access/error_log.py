import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.models.catalog import ErrorLog
from movie_revenue_analytics.domain.exceptions import RevenueAnalyticsError

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 1000

class ErrorLogRepository:
    def __init__(self, db_engine: Engine):
        """Initialize the repository with the database engine it appends to."""
        self.db_engine = db_engine

    def record(self, error: RevenueAnalyticsError) -> ErrorLog:
        """Append one entry for the error in its own committed session."""
        with Session(self.db_engine) as session:
            entry = ErrorLog(
                error_message=error.message[:MAX_MESSAGE_LENGTH],
                error_severity=error.severity,
                error_state=error.state,
            )
            session.add(entry)
            session.commit()
            session.refresh(entry)
        logger.info(f"Recorded error log entry {entry.error_id} (severity {entry.error_severity}, state {entry.error_state})")
        return entry

    def list_entries(self, limit: int = 100) -> List[ErrorLog]:
        """Return the most recent entries, newest first."""
        with Session(self.db_engine) as session:
            stmt = select(ErrorLog).order_by(ErrorLog.error_id.desc()).limit(limit)
            return list(session.execute(stmt).scalars().all())
