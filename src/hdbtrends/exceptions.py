"""
Custom Exceptions for HDB Resale Trends

Provides a hierarchy of exceptions for standardized error handling across all modules.
The aggregation functions never raise for missing or malformed record fields; these
exceptions cover the data source, snapshot files and caller input.

Exception Hierarchy:
    HdbTrendsError (base)
    ├── ConfigurationError
    ├── DataSourceError
    │   ├── NetworkError
    │   └── ParsingError
    └── ValidationError
"""


class HdbTrendsError(Exception):
    """Base exception for all HDB Resale Trends errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(HdbTrendsError):
    """Raised when an HDBTRENDS_* setting cannot be parsed."""

    pass


# Data Source Errors
class DataSourceError(HdbTrendsError):
    """Raised when the record snapshot cannot be obtained."""

    pass


class NetworkError(DataSourceError):
    """Raised when a network request fails."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ParsingError(DataSourceError):
    """Raised when an API payload or snapshot file cannot be parsed."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message)


# Validation Errors
class ValidationError(HdbTrendsError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
