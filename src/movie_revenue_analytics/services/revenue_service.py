import logging
from typing import List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.models.catalog import Country
from movie_revenue_analytics.data_access.views import revenue_by_genre_view
from movie_revenue_analytics.domain.exceptions import InvalidArgumentError
from movie_revenue_analytics.domain.models.revenue import GenreRevenue

logger = logging.getLogger(__name__)

class RevenueAggregationService:
    def __init__(self, db_engine: Engine):
        """Initialize the RevenueAggregationService with the database engine."""
        self.db_engine = db_engine

    def aggregate_revenue_by_genre(self, country_id: Optional[int] = None) -> List[GenreRevenue]:
        """Total revenue per genre, highest first, optionally for a single production country."""
        with Session(self.db_engine) as session:
            self._validate_country(session, country_id)
            view = revenue_by_genre_view(country_id)
            stmt = view.order_by(view.selected_columns.total_revenue.desc())
            rows = session.execute(stmt).all()
        logger.info(f"Aggregated revenue for {len(rows)} genres (country_id={country_id})")
        return [GenreRevenue(genre_name=row.genre_name, total_revenue=row.total_revenue) for row in rows]

    def fetch_genre_revenue_metrics(self, country_id: Optional[int] = None) -> List[GenreRevenue]:
        """Validate the country filter and run the shared revenue-by-genre view as is."""
        with Session(self.db_engine) as session:
            self._validate_country(session, country_id)
            rows = session.execute(revenue_by_genre_view(country_id)).all()
        return [GenreRevenue(genre_name=row.genre_name, total_revenue=row.total_revenue) for row in rows]

    def _validate_country(self, session: Session, country_id: Optional[int]) -> None:
        if country_id is not None and session.get(Country, country_id) is None:
            raise InvalidArgumentError(
                f"Invalid country ID provided: {country_id}. Please enter a valid country ID."
            )
