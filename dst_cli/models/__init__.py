"""
Data Models Layer.

This package contains the Pydantic model that defines the application's settings.
"""

from .config import ArchiveConfig

__all__ = ["ArchiveConfig"]
