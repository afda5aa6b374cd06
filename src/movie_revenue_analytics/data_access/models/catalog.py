# data_access/models/catalog.py
from sqlmodel import SQLModel, Field, UniqueConstraint
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import date, datetime, timezone
from decimal import Decimal

# Surrogate integer keys everywhere, with uniqueness on the natural names (genre_name,
# country_name) and on each (movie, genre) / (movie, country) pair in the bridges.

class Movie(SQLModel, table=True):
    __tablename__ = "movie"
    movie_id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    revenue: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    release_date: Optional[date] = None


class Genre(SQLModel, table=True):
    __tablename__ = "genre"
    __table_args__ = (UniqueConstraint("genre_name", name="uq_genre_name"),)
    genre_id: Optional[int] = Field(default=None, primary_key=True)
    genre_name: str


class Country(SQLModel, table=True):
    __tablename__ = "country"
    __table_args__ = (UniqueConstraint("country_name", name="uq_country_name"),)
    country_id: Optional[int] = Field(default=None, primary_key=True)
    country_name: str


class MovieGenre(SQLModel, table=True):
    __tablename__ = "movie_genres"
    __table_args__ = (UniqueConstraint("movie_id", "genre_id", name="uq_movie_genres"),)
    bridge_id: Optional[int] = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key="movie.movie_id")
    genre_id: int = Field(foreign_key="genre.genre_id")


class ProductionCountry(SQLModel, table=True):
    __tablename__ = "production_country"
    __table_args__ = (UniqueConstraint("movie_id", "country_id", name="uq_production_country"),)
    bridge_id: Optional[int] = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key="movie.movie_id")
    country_id: int = Field(foreign_key="country.country_id")


class ErrorLog(SQLModel, table=True):
    """Append-only record of failures caught by the genre revenue batch."""
    __tablename__ = "error_log"
    error_id: Optional[int] = Field(default=None, primary_key=True)
    error_datetime: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    error_message: str = Field(max_length=1000)
    error_severity: int
    error_state: int
