from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from typing import Any, Dict, List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
import logging

from movie_revenue_analytics.data_access.database import get_db_engine
from movie_revenue_analytics.data_access.error_log import ErrorLogRepository
from movie_revenue_analytics.data_access.functions import average_revenue
from movie_revenue_analytics.domain.exceptions import InvalidArgumentError
from movie_revenue_analytics.domain.models.revenue import (
    AverageRevenue, ErrorLogEntry, GenreRevenue, RankedMovie
)
from movie_revenue_analytics.services.genre_revenue_batch_service import GenreRevenueBatchService
from movie_revenue_analytics.services.pivot_service import PivotService
from movie_revenue_analytics.services.revenue_service import RevenueAggregationService
from movie_revenue_analytics.services.trend_service import GenreTrendService

logger = logging.getLogger(__name__)

class AnalyticsController:
    def __init__(self):
        """Initialize the AnalyticsController with a router."""
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self):
        """Register the revenue reporting and batch routes."""

        @self.router.get("/revenue-by-genre", response_model=List[GenreRevenue])
        def get_revenue_by_genre(
            country_id: Optional[int] = Query(None, description="Restrict to one production country"),
            db_engine: Engine = Depends(get_db_engine)
        ) -> List[GenreRevenue]:
            """Total revenue per genre, highest first."""
            try:
                return RevenueAggregationService(db_engine).aggregate_revenue_by_genre(country_id)
            except InvalidArgumentError as e:
                raise HTTPException(status_code=404, detail=str(e))
            except Exception as e:
                logger.error(f"Failed to aggregate revenue by genre: {str(e)}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.router.get("/genre-revenue-metrics", response_model=List[GenreRevenue])
        def get_genre_revenue_metrics(
            country_id: Optional[int] = Query(None, description="Restrict to one production country"),
            db_engine: Engine = Depends(get_db_engine)
        ) -> List[GenreRevenue]:
            """Revenue per genre from the shared aggregation view."""
            try:
                return RevenueAggregationService(db_engine).fetch_genre_revenue_metrics(country_id)
            except InvalidArgumentError as e:
                raise HTTPException(status_code=404, detail=str(e))
            except Exception as e:
                logger.error(f"Failed to fetch genre revenue metrics: {str(e)}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.router.get("/genre-trends/{genre_id}", response_model=List[RankedMovie])
        def get_genre_trends(genre_id: int, db_engine: Engine = Depends(get_db_engine)) -> List[RankedMovie]:
            """Cumulative revenue and revenue rank of a genre's movies."""
            try:
                return GenreTrendService(db_engine).analyze_genre_trends(genre_id)
            except InvalidArgumentError as e:
                raise HTTPException(status_code=404, detail=str(e))
            except Exception as e:
                logger.error(f"Failed to analyze trends for genre {genre_id}: {str(e)}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.router.get("/revenue-pivot")
        def get_revenue_pivot(
            genre_id: Optional[int] = Query(None),
            country_id: Optional[int] = Query(None),
            db_engine: Engine = Depends(get_db_engine)
        ) -> List[Dict[str, Any]]:
            """Revenue per genre across the fixed pivot countries."""
            try:
                return PivotService(db_engine).pivot_revenue_by_genre_and_country(genre_id, country_id)
            except Exception as e:
                logger.error(f"Failed to pivot revenue: {str(e)}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.router.get("/average-revenue/{genre_id}", response_model=AverageRevenue)
        def get_average_revenue(genre_id: int, db_engine: Engine = Depends(get_db_engine)) -> AverageRevenue:
            """Average revenue of a genre, null when it has no movies."""
            try:
                with Session(db_engine) as session:
                    return AverageRevenue(genre_id=genre_id, average_revenue=average_revenue(session, genre_id))
            except Exception as e:
                logger.error(f"Failed to compute average revenue for genre {genre_id}: {str(e)}")
                raise HTTPException(status_code=500, detail=str(e))

        @self.router.post("/genre-revenues/run", response_model=Dict[str, str])
        def run_genre_revenues(
            background_tasks: BackgroundTasks,
            db_engine: Engine = Depends(get_db_engine)
        ):
            """Schedule the genre revenue batch; failures land in the error log."""
            background_tasks.add_task(GenreRevenueBatchService(db_engine).run)
            return {"message": "Genre revenue batch started"}

        @self.router.get("/error-log", response_model=List[ErrorLogEntry])
        def get_error_log(
            limit: int = Query(100, ge=1, le=1000, description="Number of entries to return"),
            db_engine: Engine = Depends(get_db_engine)
        ) -> List[ErrorLogEntry]:
            """Most recent error log entries, newest first."""
            entries = ErrorLogRepository(db_engine).list_entries(limit)
            return [ErrorLogEntry.model_validate(entry) for entry in entries]
