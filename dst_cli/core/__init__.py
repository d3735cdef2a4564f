"""
Core Logic Layer.

This package partitions year ranges into archive-sized requests and
orchestrates the download of each one.
"""

from .fetcher import DstFetcher
from .intervals import DateCode, SubInterval, partition, to_date_code

__all__ = ["DateCode", "DstFetcher", "SubInterval", "partition", "to_date_code"]
