from fastapi import FastAPI
from movie_revenue_analytics.api.routes import analytics, seed
from movie_revenue_analytics.data_access.database import init_db
import logging
import os

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
# Suppress overly verbose SQLAlchemy logs if not needed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

app = FastAPI(title="Movie Revenue Analytics")


app.include_router(seed.router, prefix="", tags=["seed"])
app.include_router(analytics.router, prefix="", tags=["analytics"])

@app.on_event("startup")
async def startup_event():
    """Create the catalog and error log tables on startup."""
    logger.info("Starting application initialization")
    init_db()
    logger.info("Application initialized successfully")
