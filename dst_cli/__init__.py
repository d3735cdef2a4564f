"""dst-cli: download Disturbance Storm Time (DST) index data from the Kyoto WDC archive."""

__version__ = "1.0.0"
