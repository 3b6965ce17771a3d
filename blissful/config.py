"""
Configuration management for the order book.
Handles the saved database connection file and runtime settings read from
environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path

import click
from dotenv import load_dotenv

from .errors import ConfigError

APP_NAME = 'BlissfulBytesManagement'
CONFIG_FILENAME = 'database_config.json'

ENV_DATABASE_URL = 'TURSO_DATABASE_URL'
ENV_AUTH_TOKEN = 'TURSO_AUTH_TOKEN'
ENV_CONFIG_DIR = 'BLISSFUL_CONFIG_DIR'

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_config_dir() -> Path:
    """Return the per-user application directory holding the config file."""
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        return Path(override)
    return Path(click.get_app_dir(APP_NAME))


def get_config_file_path(config_dir: Optional[PathLike] = None) -> Path:
    """Return the config file path, creating its directory if needed.

    Args:
        config_dir: Directory to use instead of the per-user default

    Returns:
        Path: Location of database_config.json
    """
    directory = Path(config_dir) if config_dir else get_config_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory / CONFIG_FILENAME


@dataclass
class DatabaseConfig:
    """Saved connection details for the remote database."""

    database_url: str = ''
    auth_token: str = ''

    @classmethod
    def load(cls, path: Optional[PathLike] = None) -> 'DatabaseConfig':
        """Load the configuration from its JSON file.

        A missing file is not an error and yields an empty configuration.

        Args:
            path: Explicit file path; defaults to the per-user config file

        Returns:
            DatabaseConfig: Loaded configuration

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        config_path = Path(path) if path else get_config_file_path()
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using empty config")
            return cls()

        try:
            data = json.loads(config_path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Error loading database config: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Error loading database config: expected a JSON object")

        database_url = data.get('database_url', '')
        auth_token = data.get('auth_token', '')
        if not isinstance(database_url, str) or not isinstance(auth_token, str):
            raise ConfigError("Error loading database config: values must be strings")

        return cls(database_url=database_url, auth_token=auth_token)

    def save(self, path: Optional[PathLike] = None) -> Path:
        """Write the configuration to its JSON file.

        Returns:
            Path: File that was written

        Raises:
            ConfigError: If the file cannot be written
        """
        config_path = Path(path) if path else get_config_file_path()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(json.dumps(self.to_dict()), encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Error saving database config: {e}") from e

        logger.info(f"Saved database configuration to {config_path}")
        return config_path

    def validate(self) -> None:
        """Check the configuration is complete.

        Raises:
            ConfigError: If the URL or the token is missing
        """
        if not self.database_url.strip():
            raise ConfigError("database URL is missing")
        if not self.auth_token.strip():
            raise ConfigError("authentication token is missing")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ConfigError:
            return False
        return True

    def apply_to_env(self) -> None:
        """Export non-empty values to the TURSO_* environment variables."""
        if self.database_url:
            os.environ[ENV_DATABASE_URL] = self.database_url
        if self.auth_token:
            os.environ[ENV_AUTH_TOKEN] = self.auth_token

    def to_dict(self) -> dict:
        return asdict(self)


def update_env_from_config_file(path: Optional[PathLike] = None) -> DatabaseConfig:
    """Load the saved config file and push its values into the environment.

    Raises:
        ConfigError: If the config file is unreadable
    """
    config = DatabaseConfig.load(path)
    config.apply_to_env()
    return config


@dataclass
class Config:
    """Runtime settings for the order book."""

    # Database settings
    database_url: str = ''
    auth_token: str = ''

    # Logging settings
    log_level: str = 'INFO'
    log_dir: Optional[Path] = None

    # Pool settings
    pool_size: int = 25
    pool_recycle: int = 300
    connect_timeout: float = 10.0

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None, config_file: Optional[PathLike] = None) -> 'Config':
        """Create configuration from the saved config file and environment.

        Values from the saved config file are exported to the environment
        first, so the file wins over values already set in the shell.

        Args:
            env_file: Optional path to .env file
            config_file: Optional path to the saved database config

        Returns:
            Config: Configuration instance
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        try:
            update_env_from_config_file(config_file)
        except ConfigError as e:
            logger.warning(f"Could not update config from file: {e}")

        return cls(
            database_url=os.getenv(ENV_DATABASE_URL, '').strip(),
            auth_token=os.getenv(ENV_AUTH_TOKEN, ''),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            log_dir=Path(os.getenv('LOG_DIR')) if os.getenv('LOG_DIR') else None,
            pool_size=int(os.getenv('POOL_SIZE', '25')),
            pool_recycle=int(os.getenv('POOL_RECYCLE', '300')),
            connect_timeout=float(os.getenv('CONNECT_TIMEOUT', '10')),
        )

    @property
    def database(self) -> DatabaseConfig:
        return DatabaseConfig(database_url=self.database_url, auth_token=self.auth_token)

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid

        Raises:
            ConfigError: If a setting is missing or out of range
        """
        self.database.validate()

        if self.log_dir and not self.log_dir.exists():
            try:
                self.log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigError(f"Failed to create log directory: {e}")

        if self.pool_size <= 0:
            raise ConfigError("pool_size must be positive")
        if self.connect_timeout <= 0:
            raise ConfigError("connect_timeout must be positive")

        return True
