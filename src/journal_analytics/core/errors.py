"""Custom exception hierarchy for the analytics engine."""


class AnalyticsError(Exception):
    """Base exception for all analytics errors."""


# --- Configuration ---
class ConfigError(AnalyticsError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(AnalyticsError):
    """Input data could not be used."""


class StorageUnavailableError(DataError):
    """The storage collaborator failed while a series was being fetched."""

    def __init__(self, operation: str, user_id: str):
        self.operation = operation
        self.user_id = user_id
        super().__init__(f"Storage call [{operation}] failed for user {user_id}")


class SnapshotFormatError(DataError):
    """A JSON snapshot file does not have the expected shape."""
