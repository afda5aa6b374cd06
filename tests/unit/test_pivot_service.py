"""
Unit Tests - Revenue Pivot
"""
from decimal import Decimal

from movie_revenue_analytics.services.pivot_service import (
    PIVOT_COUNTRIES,
    PivotService,
    reshape_revenue_to_wide,
)

from sample_catalog import ACTION, COMEDY, DRAMA, SPAIN, USA


LONG_ROWS = [
    ("Action", "USA", Decimal("2000000")),
    ("Action", "UK", Decimal("1500000")),
    ("Action", "Spain", Decimal("1500000")),
    ("Comedy", "Canada", Decimal("3000000")),
]


class TestReshapeRevenueToWide:
    """Tests for the pure long-to-wide reshape"""

    def test_one_row_per_genre_with_fixed_columns(self):
        """Every row has genre_name plus exactly the pivot countries"""
        wide = reshape_revenue_to_wide(LONG_ROWS)

        assert [row["genre_name"] for row in wide] == ["Action", "Comedy"]
        for row in wide:
            assert list(row.keys()) == ["genre_name", *PIVOT_COUNTRIES]

    def test_missing_pairs_are_none_not_zero(self):
        """Absent genre/country combinations stay empty"""
        action, comedy = reshape_revenue_to_wide(LONG_ROWS)

        assert action["USA"] == Decimal("2000000")
        assert action["UK"] == Decimal("1500000")
        assert action["Canada"] is None
        assert comedy["Canada"] == Decimal("3000000")
        assert comedy["USA"] is None

    def test_countries_outside_pivot_list_are_dropped(self):
        """Spain revenue never becomes a column"""
        wide = reshape_revenue_to_wide(LONG_ROWS)

        assert all("Spain" not in row for row in wide)

    def test_genre_with_only_unlisted_countries_keeps_an_empty_row(self):
        """The genre row survives with every cell empty"""
        wide = reshape_revenue_to_wide([("Horror", "Spain", Decimal("10"))])

        assert wide == [{"genre_name": "Horror", **{country: None for country in PIVOT_COUNTRIES}}]

    def test_reshape_is_repeatable(self):
        """The same input always reshapes to the same output"""
        assert reshape_revenue_to_wide(LONG_ROWS) == reshape_revenue_to_wide(LONG_ROWS)

    def test_empty_input(self):
        """No long rows means no wide rows"""
        assert reshape_revenue_to_wide([]) == []


class TestPivotService:
    """Tests for PivotService.pivot_revenue_by_genre_and_country"""

    def test_unfiltered_pivot(self, engine):
        """Movies without a production country are left out"""
        wide = {row["genre_name"]: row for row in PivotService(engine).pivot_revenue_by_genre_and_country()}

        assert set(wide) == {"Action", "Comedy"}
        assert wide["Action"]["USA"] == Decimal("2000000")
        assert wide["Action"]["UK"] == Decimal("1500000")
        assert wide["Action"]["Germany"] is None
        assert wide["Comedy"]["USA"] == Decimal("1500000")
        assert wide["Comedy"]["UK"] == Decimal("1500000")
        assert wide["Comedy"]["Canada"] == Decimal("3000000")

    def test_genre_and_country_filters(self, engine):
        """Both filters narrow the long-form rows before reshaping"""
        wide = PivotService(engine).pivot_revenue_by_genre_and_country(genre_id=COMEDY, country_id=USA)

        assert len(wide) == 1
        assert wide[0]["genre_name"] == "Comedy"
        assert wide[0]["USA"] == Decimal("1500000")
        assert wide[0]["Canada"] is None

    def test_filter_on_unlisted_country(self, engine):
        """Action in Spain yields a row without any revenue cell"""
        wide = PivotService(engine).pivot_revenue_by_genre_and_country(genre_id=ACTION, country_id=SPAIN)

        assert wide == [{"genre_name": "Action", **{country: None for country in PIVOT_COUNTRIES}}]

    def test_genre_without_movies(self, engine):
        """No long rows for Drama means an empty pivot"""
        assert PivotService(engine).pivot_revenue_by_genre_and_country(genre_id=DRAMA) == []
