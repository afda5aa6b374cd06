import os
from sqlmodel import create_engine, SQLModel
from sqlalchemy.engine import Engine
import logging
from typing import Optional

from movie_revenue_analytics.data_access.models.catalog import (
    Movie, Genre, Country, MovieGenre, ProductionCountry, ErrorLog
)

# Configure logging
logger = logging.getLogger(__name__)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

_engine: Optional[Engine] = None

def _create_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # SQLite pools do not take size/overflow settings
        return create_engine(database_url, echo=False, pool_pre_ping=True)
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=5,
        max_overflow=10
    )

def get_db_engine() -> Engine:
    """Provide the database engine for dependency injection, creating it on first use."""
    global _engine
    if _engine is None:
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL environment variable not set")
        _engine = _create_engine(database_url)
    return _engine

def init_db(engine: Optional[Engine] = None):
    """Initialize the database by creating the catalog and error log tables."""
    engine = engine or get_db_engine()
    try:
        logger.info("Initializing database tables")
        SQLModel.metadata.create_all(engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise
