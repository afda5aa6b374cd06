from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.models.catalog import Movie, MovieGenre

TWO_PLACES = Decimal("0.01")

def average_revenue(session: Session, genre_id: int) -> Optional[Decimal]:
    """Average revenue of the genre's movies, or None when the genre has none."""
    stmt = (
        select(func.avg(Movie.revenue))
        .select_from(Movie)
        .join(MovieGenre, MovieGenre.movie_id == Movie.movie_id)
        .where(MovieGenre.genre_id == genre_id)
    )
    value = session.execute(stmt).scalar()
    if value is None:
        return None
    return Decimal(str(value)).quantize(TWO_PLACES)
