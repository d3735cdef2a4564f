"""
Storage Layer.

This package handles configuration files and writing downloaded data to disk.
"""

from .config_manager import ConfigManager
from .output import write_output

__all__ = ["ConfigManager", "write_output"]
