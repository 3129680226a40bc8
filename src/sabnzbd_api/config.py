"""
Configuration management module.
Supports hot-reloading, environment overrides and Pydantic validation.
"""

import os
import tomllib
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from tomlkit import dumps as toml_dumps

from .exceptions import ConfigurationError, SabnzbdError
from .logger import configure_logger, logger

HOST_ENV = "SABNZBD_HOST"
API_KEY_ENV = "SABNZBD_API_KEY"


class SabnzbdConfig(BaseModel):
    host: str = "http://localhost:8080"
    api_key: str = ""
    request_timeout: float = 60.0  # Total transport timeout in seconds
    verify_ssl: bool = True

    @field_validator("host")
    @classmethod
    def _check_host(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("host must start with http:// or https://")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be positive")
        return value


class LogConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"  # Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    file_level: str = "DEBUG"  # File log level
    rotation: str = (
        "00:00"  # Log rotation time (e.g., "00:00" for midnight, "500 MB" for size-based)
    )
    retention: str = "1 week"  # How long to keep old logs
    directory: str = ""  # Empty disables the file sink


class UserConfig(BaseModel):
    sabnzbd: SabnzbdConfig = Field(default_factory=SabnzbdConfig)
    log: LogConfig = Field(default_factory=LogConfig)


class ConfigManager:
    def __init__(self, config_path: Union[str, Path] = "config.toml"):
        self.config_path = Path(os.getcwd()) / config_path
        self._config: UserConfig = UserConfig()
        self._last_mtime: float = 0

        self.reload()

    @staticmethod
    def _env_overrides() -> Dict[str, str]:
        """Endpoint identity taken from the environment, never written back to the file."""
        overrides: Dict[str, str] = {}
        if os.environ.get(HOST_ENV):
            overrides["host"] = os.environ[HOST_ENV].rstrip("/")
        if os.environ.get(API_KEY_ENV):
            overrides["api_key"] = os.environ[API_KEY_ENV]
        return overrides

    def reload(self) -> None:
        """Reload configuration from file unconditionally."""
        if not self.config_path.exists():
            return

        try:
            content = self.config_path.read_bytes()
            raw = tomllib.loads(content.decode("utf-8"))
            self._config = UserConfig.model_validate(raw)
            self._last_mtime = self.config_file_stat.st_mtime
        except (tomllib.TOMLDecodeError, ValidationError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {self.config_path}: {e}"
            ) from e

    @property
    def config_file_stat(self) -> os.stat_result:
        return self.config_path.stat()

    @property
    def data(self) -> UserConfig:
        """
        Get configuration data.
        Checks for file updates on every access.
        """
        if self.config_path.exists():
            try:
                current_mtime = self.config_file_stat.st_mtime
                if current_mtime > self._last_mtime:
                    self.reload()
            except OSError:
                pass
        return self._config

    def save(self) -> None:
        """Save the file-backed configuration. Environment overrides are not persisted."""
        payload = self._config.model_dump()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(toml_dumps(payload), encoding="utf-8")
        self._last_mtime = self.config_file_stat.st_mtime

    def validate(self) -> bool:
        """
        Check that the endpoint identity is usable.

        Returns:
            True if host and API key are configured, False otherwise.
        """
        errors: list[str] = []

        if not self.sabnzbd.host:
            errors.append("SABnzbd host is not configured in [sabnzbd] host.")

        if not self.sabnzbd.api_key:
            errors.append(
                "SABnzbd API key is not configured in [sabnzbd] api_key. "
                f"Set it in the file or through the {API_KEY_ENV} environment variable."
            )

        for e in errors:
            logger.error(f"Config Error: {e}")

        return len(errors) == 0

    @property
    def sabnzbd(self) -> SabnzbdConfig:
        return self.data.sabnzbd.model_copy(update=self._env_overrides())

    @property
    def log(self) -> LogConfig:
        return self.data.log

    def configure_logging(self, log_name: str = "sabnzbd_api") -> None:
        """Apply the [log] section to the logger."""
        configure_logger(
            console_level=self.log.level,
            file_level=self.log.file_level,
            rotation=self.log.rotation,
            retention=self.log.retention,
            log_name=log_name,
            log_dir=Path(self.log.directory) if self.log.directory else None,
        )

    async def validate_connection(self) -> bool:
        """
        Verify the configured server answers an authenticated version query.

        Returns:
            True if the server responded with a version, False otherwise.
        """
        from .api import SabnzbdClient

        try:
            client = SabnzbdClient.from_config(self.sabnzbd)
            logger.info(f"Verifying SABnzbd server at {client.endpoint.with_user(None)}...")
            version = await client.version()
        except SabnzbdError as e:
            logger.error(f"Cannot use SABnzbd server: {e}")
            return False

        logger.info(f"SABnzbd server OK (version {version}).")
        return True


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Load configuration from ``config_path``, the CONFIG_PATH env var, or config.toml."""
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config.toml")
    return ConfigManager(config_path)
