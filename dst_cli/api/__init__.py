"""
Archive API Layer.

This package handles all HTTP communication with the Kyoto WDC DST archive.
"""

from .client import ArchiveClient
from .rate_limiter import RequestThrottle

__all__ = ["ArchiveClient", "RequestThrottle"]
