import pandas as pd
from decimal import Decimal
from typing import Dict, List, Iterable
from pathlib import Path
import logging
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from movie_revenue_analytics.data_access.models.catalog import (
    Movie, Genre, Country, MovieGenre, ProductionCountry
)
from movie_revenue_analytics.domain.models.revenue import SeedResult

logger = logging.getLogger(__name__)

class SeedService:
    REQUIRED_COLUMNS = ["title", "revenue", "release_date"]

    def __init__(self, db_engine: Engine):
        """Initialize the SeedService with the database engine to load into."""
        self.db_engine = db_engine

    def load_file(self, file_path: str) -> SeedResult:
        """Read a CSV or JSON movie file and load it into the catalog."""
        file_type = Path(file_path).suffix[1:].lower()
        filename = Path(file_path).name

        if file_type == "csv":
            df = pd.read_csv(file_path)
        elif file_type == "json":
            df = pd.read_json(file_path)
        else:
            raise ValueError(f"Unsupported file type '{file_type}' for {filename}")

        logger.info(f"Extracted {len(df)} records from {filename}")
        return self.load(df)

    def load(self, df: pd.DataFrame) -> SeedResult:
        """Load flat movie records (comma-separated genres and countries) into the catalog tables."""
        missing_cols = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing_cols:
            logger.error(f"Missing required columns for seeding: {missing_cols}")
            raise KeyError(f"Missing required columns: {missing_cols}")

        df = df.copy()
        df["revenue"] = pd.to_numeric(df["revenue"], errors="coerce").fillna(0)
        if (df["revenue"] < 0).any():
            raise ValueError("Movie revenue must be non-negative")
        df["release_date"] = pd.to_datetime(df["release_date"].astype(str).str.strip(), errors="coerce")
        df["genre_list"] = self._split_names(df, "genres")
        df["country_list"] = self._split_names(df, "countries")

        try:
            with Session(self.db_engine) as session:
                genre_ids, new_genres = self._ensure_names(
                    session, Genre, "genre_id", "genre_name", df["genre_list"].explode().dropna().unique()
                )
                country_ids, new_countries = self._ensure_names(
                    session, Country, "country_id", "country_name", df["country_list"].explode().dropna().unique()
                )

                for _, row in df.iterrows():
                    movie = Movie(
                        title=str(row["title"]),
                        revenue=Decimal(str(row["revenue"])),
                        release_date=row["release_date"].date() if pd.notna(row["release_date"]) else None,
                    )
                    if "movie_id" in df.columns and pd.notna(row["movie_id"]):
                        movie.movie_id = int(row["movie_id"])
                    session.add(movie)
                    session.flush()

                    for genre_name in dict.fromkeys(row["genre_list"]):
                        session.add(MovieGenre(movie_id=movie.movie_id, genre_id=genre_ids[genre_name]))
                    for country_name in dict.fromkeys(row["country_list"]):
                        session.add(ProductionCountry(movie_id=movie.movie_id, country_id=country_ids[country_name]))

                session.commit()
        except Exception as e:
            logger.error(f"Failed to seed catalog: {str(e)}")
            raise

        result = SeedResult(movies=len(df), genres=new_genres, countries=new_countries)
        logger.info(f"Seeded {result.movies} movies, {result.genres} new genres and {result.countries} new countries")
        return result

    def _split_names(self, df: pd.DataFrame, column: str) -> pd.Series:
        """Split a comma-separated name column into lists; a missing column yields empty lists."""
        if column not in df.columns:
            return pd.Series([[] for _ in range(len(df))], index=df.index, dtype=object)
        return df[column].fillna("").astype(str).apply(
            lambda value: [name.strip() for name in value.split(",") if name.strip()]
        )

    def _ensure_names(
        self, session: Session, model, id_field: str, name_field: str, names: Iterable[str]
    ) -> tuple[Dict[str, int], int]:
        """Map each name to its id, inserting the names not yet in the table."""
        wanted: List[str] = [str(name) for name in names]
        name_col = getattr(model, name_field)

        existing = session.execute(select(model).where(name_col.in_(wanted))).scalars().all() if wanted else []
        ids = {getattr(item, name_field): getattr(item, id_field) for item in existing}

        created = 0
        for name in wanted:
            if name not in ids:
                item = model(**{name_field: name})
                session.add(item)
                session.flush()
                ids[name] = getattr(item, id_field)
                created += 1
        return ids, created
