"""
Configuration manager for loading and validating the target list and environment.
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import ValidationError

from .models import MonitorConfig, MonitorSettings


logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid. Always fatal at startup."""


class ConfigurationManager:
    """Manages loading and validation of the monitor configuration."""

    DEFAULT_CONFIG_FILENAME = "config.yaml"
    DEVELOPMENT_ENV_FILENAME = ".env.development"
    PRODUCTION_ENV_FILENAME = ".env.production"

    def load_config(self, config_path: Optional[str] = None) -> MonitorConfig:
        """
        Load and validate configuration from a YAML (or JSON) file.

        Args:
            config_path: Path to configuration file. If None, uses default.

        Returns:
            Validated MonitorConfig instance.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        if config_path is None:
            config_path = self.get_default_config_path()

        try:
            raw = self._load_yaml_file(config_path)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

        config = self.validate_config(raw)
        logger.debug(f"Loaded {len(config.targets)} targets from {config_path}")
        return config

    def validate_config(self, config: Union[Dict[str, Any], list, None]) -> MonitorConfig:
        """
        Validate a configuration mapping, or a bare list of target entries.

        Args:
            config: Parsed configuration data.

        Returns:
            Validated MonitorConfig instance.
        """
        if isinstance(config, list):
            config = {"targets": config}
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a list of targets or a mapping with 'targets'")

        try:
            validated = MonitorConfig(**config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e
        except TypeError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        if validated.timezone is not None:
            try:
                ZoneInfo(validated.timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ConfigurationError(f"Unknown timezone: {validated.timezone}") from e

        return validated

    def load_settings(self, env_file: Optional[str] = None, config_dir: Optional[str] = None) -> MonitorSettings:
        """
        Load runtime settings from the environment, after reading an optional dotenv file.

        When env_file is None the file is chosen by MONITOR_ENV: ``.env.development``
        for ``development``, ``.env.production`` otherwise, looked up in config_dir.
        Variables already present in the environment take precedence.
        """
        if env_file is None:
            env_file = str(self.resolve_env_file(config_dir))

        if Path(env_file).exists():
            load_dotenv(env_file, override=False)
            logger.info(f"Loaded environment file '{env_file}'")
        else:
            logger.debug(f"Environment file '{env_file}' not found, using process environment only")

        mode = os.getenv("MONITOR_MODE")
        if not mode:
            mode = "immediate" if os.getenv("MONITOR_ENV") == "development" else "scheduled"

        try:
            return MonitorSettings(
                mode=mode.strip().lower(),
                slack_bot_token=os.getenv("SLACK_BOT_TOKEN") or None,
                slack_channel_id=os.getenv("SLACK_CHANNEL_ID") or None,
                cron_schedule=os.getenv("CRON_SCHEDULE") or None,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment settings: {e}") from e

    def resolve_env_file(self, config_dir: Optional[str] = None) -> Path:
        """Pick the dotenv file for the current MONITOR_ENV."""
        if os.getenv("MONITOR_ENV") == "development":
            filename = self.DEVELOPMENT_ENV_FILENAME
        else:
            filename = self.PRODUCTION_ENV_FILENAME
        return Path(config_dir or ".") / filename

    def get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        return self.DEFAULT_CONFIG_FILENAME

    def _load_yaml_file(self, file_path: str) -> Any:
        """Load YAML file and return the parsed document."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file)
