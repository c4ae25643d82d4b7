"""Configuration management with environment variable and YAML support"""

import os
from typing import Any, Dict, Optional, Tuple, Type

import httpx
import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from epgstation_cleaner.core.errors import ConfigError

VALID_LOG_LEVELS = ("ERROR", "WARN", "INFO", "DEBUG")
VALID_LOG_FORMATS = ("json", "console")


def normalize_log_level(value: str) -> str:
    """Upper-case a log level name, accepting WARNING as an alias of WARN.

    Raises:
        ValueError: If the level is not recognized.
    """
    level = value.strip().upper()
    if level == "WARNING":
        level = "WARN"
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {list(VALID_LOG_LEVELS)}")
    return level


class Config(BaseSettings):
    """Cleaner configuration.

    Values are read from environment variables (highest priority), then from
    keyword arguments (YAML data), then from defaults. Environment variable
    names are the ones deployed installations already use, so they carry no
    common prefix.
    """

    base_url: str = Field("http://localhost:8888", validation_alias="EPGSTATION_BASE_URL")
    retain_duration: str = Field("336h", validation_alias="RETAIN_DURATION")
    dry_run: bool = Field(False, validation_alias="IS_DRY_RUN")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field("json", validation_alias="LOG_FORMAT")
    # EPGStation usually runs on the local network with a self-signed certificate
    trust_all_certificates: bool = Field(True, validation_alias="TRUST_ALL_CERTIFICATES")
    timeout: float = Field(5.0, validation_alias="REQUEST_TIMEOUT")  # seconds

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings source priority: env vars > init kwargs > defaults."""
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError(f"base_url is not a valid URL: {e}") from e
        if not url.host:
            raise ValueError("base_url must include a host")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        return normalize_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v_lower = v.strip().lower()
        if v_lower not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {list(VALID_LOG_FORMATS)}")
        return v_lower

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be greater than 0")
        return v


class ConfigService:
    """Service for loading the cleaner configuration"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load configuration from an optional YAML file with environment overrides.

        Raises:
            ConfigError: If the YAML file is missing or unreadable, or a value
                fails validation.
        """
        config_data = self._read_yaml()

        try:
            self._config = Config(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return self._config

    def _read_yaml(self) -> Dict[str, Any]:
        if self.config_path is None:
            return {}

        if not os.path.exists(self.config_path):
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read configuration file {self.config_path}: {e}") from e

        if yaml_data is None:
            return {}
        if not isinstance(yaml_data, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {self.config_path}")
        return yaml_data

    @property
    def config(self) -> Config:
        """Get the loaded configuration"""
        if self._config is None:
            raise ValueError("Configuration not loaded. Call load() first.")
        return self._config
