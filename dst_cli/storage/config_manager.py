"""
Manages loading, validation, and saving of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dst_cli.exceptions import ConfigurationError
from dst_cli.models.config import ArchiveConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> ArchiveConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error: the built-in defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated ArchiveConfig object.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except (configparser.Error, UnicodeDecodeError) as e:
                raise ConfigurationError(f"Error parsing configuration file: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Error reading configuration file: {e}") from e
            config_from_file = self._get_config_as_dict()
        else:
            log.debug(
                f"No configuration file at '{self.config_file_path}', using defaults."
            )

        if cli_options:
            config_from_file.update(cli_options)

        try:
            return ArchiveConfig(
                **config_from_file, config_path=str(self.config_file_path)
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_config(self, config: ArchiveConfig) -> None:
        """
        Writes a complete configuration file from the given settings.

        Args:
            config: The settings to save.
        """
        parser = configparser.ConfigParser(interpolation=None)
        parser["DEFAULT"] = {
            key: str(getattr(config, key)) for key in sorted(ArchiveConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        unknown = set(section) - ArchiveConfig.get_ini_keys()
        for key in sorted(unknown):
            log.warning(f"[yellow]Ignoring unknown configuration key '{key}'.[/yellow]")

        try:
            values: dict[str, Any] = {
                "base_url": section.get("base_url"),
                "period": section.getint("period"),
                "timeout": section.getfloat("timeout"),
                "request_interval": section.getfloat("request_interval"),
                "user_agent": section.get("user_agent"),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

        return {key: value for key, value in values.items() if value is not None}
