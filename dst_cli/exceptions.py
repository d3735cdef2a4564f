"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class DstCliError(Exception):
    """Base exception for all application-specific errors."""


class InvalidRangeError(DstCliError):
    """
    Raised when a requested year range lies outside what the archive holds.
    Always raised before any request is sent.
    """

    def __init__(self, year: int, message: str):
        super().__init__(message)
        self.year = year


class TransportError(DstCliError):
    """Raised when a request to the archive fails or returns a non-2xx status."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ConfigurationError(DstCliError):
    """Raised for issues related to configuration loading or validation."""
