from decimal import Decimal
from typing import Callable, List, Optional, Tuple
import logging
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.error_log import ErrorLogRepository
from movie_revenue_analytics.data_access.functions import average_revenue
from movie_revenue_analytics.data_access.views import high_revenue_genres_view
from movie_revenue_analytics.domain.exceptions import BatchFailure, ComputationFailure

logger = logging.getLogger(__name__)

HIGH_REVENUE_THRESHOLD = Decimal("1000000")

GenreKey = Tuple[int, str]
AverageFunction = Callable[[Session, int], Optional[Decimal]]


class GenreRevenueBatchService:
    """
    Reports the average revenue of every genre that has a high-revenue movie.

    Genres are processed one at a time. A failure for one genre is written to the
    error log and the batch moves on to the next genre. A failure anywhere else
    (enumeration, or an error escaping the per-genre handler) is written to the
    error log once and ends the run. ``run`` never raises.

    Example:
        service = GenreRevenueBatchService(engine)
        service.run()
        # Genre: Action, Average Revenue: 1166666.67
    """

    def __init__(
        self,
        db_engine: Engine,
        error_log: Optional[ErrorLogRepository] = None,
        average_fn: AverageFunction = average_revenue,
        genre_source: Optional[Callable[[], List[GenreKey]]] = None,
        output: Callable[[str], None] = print,
    ):
        self.db_engine = db_engine
        self.error_log = error_log or ErrorLogRepository(db_engine)
        self.average_fn = average_fn
        self.genre_source = genre_source or self.find_high_revenue_genres
        self.output = output

    def find_high_revenue_genres(self) -> List[GenreKey]:
        """Materialize the (genre_id, genre_name) pairs to process before the loop starts."""
        with Session(self.db_engine) as session:
            rows = session.execute(high_revenue_genres_view(HIGH_REVENUE_THRESHOLD)).all()
        return [(row.genre_id, row.genre_name) for row in rows]

    def run(self) -> None:
        logger.info("Starting genre revenue batch")
        processed, failed = 0, 0
        try:
            genres = self.genre_source()
            logger.info(f"Found {len(genres)} genres with movies above {HIGH_REVENUE_THRESHOLD}")

            for genre_id, genre_name in genres:
                try:
                    self._process_genre(genre_id, genre_name)
                    processed += 1
                except Exception as e:
                    failed += 1
                    failure = ComputationFailure.wrap(
                        f"Failed to compute average revenue for genre '{genre_name}' (id={genre_id}): {str(e)}", e
                    )
                    logger.error(failure.message)
                    self.error_log.record(failure)
        except Exception as e:
            failure = BatchFailure(f"Genre revenue batch aborted: {str(e)}")
            logger.error(failure.message)
            try:
                self.error_log.record(failure)
            except Exception:
                logger.exception("Failed to record genre revenue batch failure in the error log")
            return

        logger.info(f"Genre revenue batch completed: {processed} succeeded, {failed} failed")

    def _process_genre(self, genre_id: int, genre_name: str) -> None:
        with Session(self.db_engine) as session:
            avg_revenue = self.average_fn(session, genre_id)
        shown = avg_revenue if avg_revenue is not None else "N/A"
        self.output(f"Genre: {genre_name}, Average Revenue: {shown}")
