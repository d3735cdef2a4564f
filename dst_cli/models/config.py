"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dst_cli import __version__
from dst_cli.core.fetcher import ARCHIVE_URL, DEFAULT_PERIOD

DEFAULT_USER_AGENT = f"dst-cli/{__version__}"


class ArchiveConfig(BaseModel):
    """A validated configuration model for talking to the DST archive."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    base_url: str = ARCHIVE_URL
    period: int = DEFAULT_PERIOD
    timeout: float = 60.0
    request_interval: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT

    # Internal field not loaded from the INI file
    config_path: str = Field("", repr=False)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensures the archive address is an absolute http(s) URL without a query."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Archive URL must start with http:// or https://, got: {v}")
        if "?" in v:
            raise ValueError("Archive URL must not contain a query string.")
        return v

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: int) -> int:
        """Ensures a usable number of years per request."""
        if v < 1 or v > 100:
            raise ValueError("Period must be between 1 and 100 years.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be greater than 0 seconds.")
        return v

    @field_validator("request_interval")
    @classmethod
    def validate_request_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Request interval cannot be negative.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
