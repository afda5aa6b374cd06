import pandas as pd
from typing import List
import logging
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.models.catalog import Genre
from movie_revenue_analytics.data_access.views import genre_movies_view
from movie_revenue_analytics.domain.exceptions import InvalidArgumentError
from movie_revenue_analytics.domain.models.revenue import RankedMovie

logger = logging.getLogger(__name__)

MOVIE_COLUMNS = ["movie_id", "title", "revenue", "release_date"]
TREND_COLUMNS = ["movie_id", "title", "revenue", "release_date", "cumulative_revenue", "revenue_rank"]


def compute_revenue_trends(movies: pd.DataFrame) -> pd.DataFrame:
    """Add a chronological running revenue total and a revenue rank to a genre's movies.

    The running total follows release date ascending (undated movies first, ties
    by movie_id) and includes the current row. The rank is a competition rank by
    revenue descending, so equal revenues share a rank and the next rank skips.
    Both passes run independently over the same frame and are joined back on
    movie_id. The result is ordered by rank.
    """
    if movies.empty:
        return pd.DataFrame(columns=TREND_COLUMNS)

    # Pass 1: running total in release order
    chronological = movies.sort_values(
        ["release_date", "movie_id"], na_position="first", kind="mergesort"
    )
    cumulative = pd.DataFrame({
        "movie_id": chronological["movie_id"],
        "cumulative_revenue": chronological["revenue"].cumsum(),
    })

    # Pass 2: rank by revenue, highest first; ties take the first position of their group.
    # Compared on the exact values so large Decimals never collapse into a float tie.
    by_revenue = movies.sort_values("revenue", ascending=False, kind="mergesort")
    positions = pd.Series(range(1, len(by_revenue) + 1), index=by_revenue.index)
    ranked = pd.DataFrame({
        "movie_id": by_revenue["movie_id"],
        "revenue_rank": positions.groupby(by_revenue["revenue"]).transform("min").astype(int),
    })

    trends = movies.merge(cumulative, on="movie_id").merge(ranked, on="movie_id")
    trends = trends.sort_values(
        ["revenue_rank", "release_date", "movie_id"], na_position="first", kind="mergesort"
    )
    return trends[TREND_COLUMNS].reset_index(drop=True)


class GenreTrendService:
    def __init__(self, db_engine: Engine):
        """Initialize the GenreTrendService with the database engine."""
        self.db_engine = db_engine

    def analyze_genre_trends(self, genre_id: int) -> List[RankedMovie]:
        """Cumulative revenue and revenue rank for every movie of a genre, best ranked first."""
        with Session(self.db_engine) as session:
            if session.get(Genre, genre_id) is None:
                raise InvalidArgumentError(
                    f"Invalid genre ID provided: {genre_id}. Please enter a valid genre ID."
                )
            rows = session.execute(genre_movies_view(genre_id)).all()

        if not rows:
            logger.info(f"No data available for the specified genre (genre_id={genre_id}).")
            return []

        movies = pd.DataFrame([tuple(row) for row in rows], columns=MOVIE_COLUMNS)
        movies["release_date"] = pd.to_datetime(movies["release_date"], errors="coerce")
        trends = compute_revenue_trends(movies)
        logger.info(f"Ranked {len(trends)} movies for genre_id={genre_id}")

        return [
            RankedMovie(
                title=row.title,
                revenue=row.revenue,
                cumulative_revenue=row.cumulative_revenue,
                revenue_rank=int(row.revenue_rank),
            )
            for row in trends.itertuples(index=False)
        ]
