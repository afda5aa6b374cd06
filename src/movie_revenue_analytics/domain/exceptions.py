from typing import Optional


class RevenueAnalyticsError(Exception):
    """Base error carrying the severity and state codes written to the error log."""

    severity: int = 16
    state: int = 1

    def __init__(self, message: str, severity: Optional[int] = None, state: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if severity is not None:
            self.severity = severity
        if state is not None:
            self.state = state


class InvalidArgumentError(RevenueAnalyticsError, ValueError):
    """An unknown genre or country id was passed to a reporting operation."""

    severity = 16
    state = 1


class ComputationFailure(RevenueAnalyticsError):
    """A single genre failed inside the batch; the batch keeps going."""

    severity = 16
    state = 2

    @classmethod
    def wrap(cls, message: str, cause: Exception) -> "ComputationFailure":
        if isinstance(cause, RevenueAnalyticsError):
            return cls(message, severity=cause.severity, state=cause.state)
        return cls(message)


class BatchFailure(RevenueAnalyticsError):
    """The batch failed outside the per-genre boundary and stopped."""

    severity = 16
    state = 3
