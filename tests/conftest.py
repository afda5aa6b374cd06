"""
Test Suite Configuration
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.engine import Engine

from sample_catalog import CATALOG_MOVIES, COUNTRIES, GENRES, make_engine, populate


@pytest.fixture
def empty_engine() -> Engine:
    """In-memory database with the schema but no rows"""
    engine = make_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def engine(empty_engine) -> Engine:
    """In-memory database seeded with the sample catalog"""
    populate(empty_engine, GENRES, COUNTRIES, CATALOG_MOVIES)
    return empty_engine


@pytest.fixture
def scenario_engine(empty_engine) -> Engine:
    """Action with revenues 500000 and 1500000, Drama with no movies"""
    populate(
        empty_engine,
        {1: "Action", 2: "Drama"},
        {},
        [
            (1, "Small Action", Decimal("500000"), date(2010, 1, 1), [1], []),
            (2, "Big Action", Decimal("1500000"), date(2011, 1, 1), [1], []),
        ],
    )
    return empty_engine
