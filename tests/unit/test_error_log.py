"""
Unit Tests - Error Log
"""
from movie_revenue_analytics.data_access.error_log import MAX_MESSAGE_LENGTH, ErrorLogRepository
from movie_revenue_analytics.data_access.models.catalog import ErrorLog
from movie_revenue_analytics.domain.exceptions import BatchFailure, ComputationFailure


class TestErrorLogRepository:
    """Tests for ErrorLogRepository"""

    def test_default_timestamp_is_timezone_aware(self):
        """Entries are stamped in UTC so timezone-aware columns accept them"""
        entry = ErrorLog(error_message="boom", error_severity=16, error_state=2)

        assert entry.error_datetime.tzinfo is not None
        assert entry.error_datetime.utcoffset().total_seconds() == 0

    def test_timestamp_column_stores_timezone(self):
        """The error_datetime column is declared timezone-aware"""
        assert ErrorLog.__table__.c.error_datetime.type.timezone is True

    def test_record_assigns_id_and_timestamp(self, empty_engine):
        """The store fills in the id and the insert time"""
        entry = ErrorLogRepository(empty_engine).record(ComputationFailure("boom"))

        assert entry.error_id is not None
        assert entry.error_datetime is not None
        assert entry.error_message == "boom"
        assert (entry.error_severity, entry.error_state) == (16, 2)

    def test_entries_are_listed_newest_first(self, empty_engine):
        """list_entries returns the latest entries first"""
        repository = ErrorLogRepository(empty_engine)
        repository.record(ComputationFailure("first"))
        repository.record(BatchFailure("second"))

        entries = repository.list_entries()

        assert [entry.error_message for entry in entries] == ["second", "first"]
        assert repository.list_entries(limit=1)[0].error_message == "second"

    def test_long_messages_are_truncated(self, empty_engine):
        """Messages are capped at the column size"""
        entry = ErrorLogRepository(empty_engine).record(ComputationFailure("x" * 5000))

        assert len(entry.error_message) == MAX_MESSAGE_LENGTH
