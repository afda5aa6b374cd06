"""Composable revenue queries shared by the reporting services.

Each builder returns an unexecuted ``Select`` so callers can order it, wrap it
in a subquery or run it as is. The builders never validate their filters; the
calling service checks ids before invoking them.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy import Select, func, select

from movie_revenue_analytics.data_access.models.catalog import (
    Movie, Genre, Country, MovieGenre, ProductionCountry
)


def revenue_by_genre_view(country_id: Optional[int] = None) -> Select:
    """Total revenue per genre, optionally restricted to one production country.

    Production countries are outer-joined, so with no filter a movie without
    any country still counts towards its genres.
    """
    stmt = (
        select(Genre.genre_name, func.sum(Movie.revenue).label("total_revenue"))
        .select_from(Movie)
        .join(MovieGenre, MovieGenre.movie_id == Movie.movie_id)
        .join(Genre, Genre.genre_id == MovieGenre.genre_id)
        .outerjoin(ProductionCountry, ProductionCountry.movie_id == Movie.movie_id)
        .group_by(Genre.genre_name)
    )
    if country_id is not None:
        stmt = stmt.where(ProductionCountry.country_id == country_id)
    return stmt


def revenue_by_genre_and_country_view(
    genre_id: Optional[int] = None, country_id: Optional[int] = None
) -> Select:
    """Long-form (genre, country, revenue) rows; movies without a country are excluded."""
    stmt = (
        select(
            Genre.genre_name,
            Country.country_name,
            func.sum(Movie.revenue).label("total_revenue"),
        )
        .select_from(Movie)
        .join(MovieGenre, MovieGenre.movie_id == Movie.movie_id)
        .join(Genre, Genre.genre_id == MovieGenre.genre_id)
        .join(ProductionCountry, ProductionCountry.movie_id == Movie.movie_id)
        .join(Country, Country.country_id == ProductionCountry.country_id)
        .group_by(Genre.genre_name, Country.country_name)
    )
    if genre_id is not None:
        stmt = stmt.where(Genre.genre_id == genre_id)
    if country_id is not None:
        stmt = stmt.where(Country.country_id == country_id)
    return stmt


def genre_movies_view(genre_id: int) -> Select:
    """Every movie tagged with the genre, with the columns the trend analysis needs."""
    return (
        select(Movie.movie_id, Movie.title, Movie.revenue, Movie.release_date)
        .join(MovieGenre, MovieGenre.movie_id == Movie.movie_id)
        .where(MovieGenre.genre_id == genre_id)
    )


def high_revenue_genres_view(threshold: Decimal) -> Select:
    """Genres with at least one movie earning strictly more than ``threshold``."""
    high_revenue_movies = select(Movie.movie_id).where(Movie.revenue > threshold)
    genre_ids = select(MovieGenre.genre_id).where(MovieGenre.movie_id.in_(high_revenue_movies))
    return (
        select(Genre.genre_id, Genre.genre_name)
        .where(Genre.genre_id.in_(genre_ids))
        .order_by(Genre.genre_id)
    )
