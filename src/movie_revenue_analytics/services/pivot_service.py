import pandas as pd
from typing import Any, Dict, Iterable, List, Optional, Sequence
import logging
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.views import revenue_by_genre_and_country_view

logger = logging.getLogger(__name__)

# The wide layout always has exactly these country columns. Revenue from any other
# country is aggregated upstream but never appears in the pivoted rows.
PIVOT_COUNTRIES = ("USA", "UK", "Canada", "Germany", "France", "Japan")

LONG_COLUMNS = ["genre_name", "country_name", "total_revenue"]


def reshape_revenue_to_wide(
    rows: Iterable[Sequence[Any]], countries: Sequence[str] = PIVOT_COUNTRIES
) -> List[Dict[str, Any]]:
    """Reshape (genre_name, country_name, total_revenue) rows into one row per genre.

    Each output row holds ``genre_name`` plus one key per entry in ``countries``.
    A genre/country pair missing from the input is None, not zero.
    """
    long_df = pd.DataFrame([tuple(row) for row in rows], columns=LONG_COLUMNS)
    if long_df.empty:
        return []

    wide = long_df.pivot_table(
        index="genre_name",
        columns="country_name",
        values="total_revenue",
        aggfunc="sum",
    )
    wide = wide.reindex(columns=list(countries)).sort_index()
    wide = wide.astype(object).where(wide.notna(), None)
    wide.columns.name = None
    return wide.reset_index().to_dict(orient="records")


class PivotService:
    def __init__(self, db_engine: Engine):
        """Initialize the PivotService with the database engine."""
        self.db_engine = db_engine

    def pivot_revenue_by_genre_and_country(
        self, genre_id: Optional[int] = None, country_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Revenue per genre laid out across the fixed pivot countries."""
        logger.info(f"Starting revenue pivot (genre_id={genre_id}, country_id={country_id})")
        with Session(self.db_engine) as session:
            rows = session.execute(revenue_by_genre_and_country_view(genre_id, country_id)).all()
        logger.info(f"Loaded {len(rows)} genre/country revenue rows for pivot")
        return reshape_revenue_to_wide(rows)
