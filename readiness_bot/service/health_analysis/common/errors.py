"""Exceptions raised by the health analysis engine and its storage layer."""


class ReadinessBotError(Exception):
    """Base class for all domain errors."""


class NoMetricsError(ReadinessBotError):
    """Raised when an analysis needs at least one day of metrics and none exist."""

    def __init__(self, user_id=None):
        self.user_id = user_id
        message = "No daily metrics recorded yet"
        if user_id is not None:
            message += f" for user {user_id}"
        super().__init__(message)


class DuplicateMetricsError(ReadinessBotError):
    """Raised when a day's metrics are written twice; records are append-only."""

    def __init__(self, user_id: int, date):
        self.user_id = user_id
        self.date = date
        super().__init__(f"Metrics for {date} already recorded for user {user_id}")
