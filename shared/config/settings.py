"""
Centralized settings management for the dataset tool.

Settings are loaded from environment variables (prefixed with
``DATASET_TOOL_``) and an optional ``.env`` file.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import Environment, get_environment
from .logging_config import LoggingConfig, get_default_logging_config


class Settings(BaseSettings):
    """
    Main application settings.

    Inherits from BaseSettings to automatically load from environment
    variables and .env files. Nested values use ``__`` as delimiter, e.g.
    ``DATASET_TOOL_LOGGING__LEVEL=DEBUG``.
    """
    model_config = SettingsConfigDict(
        env_prefix='DATASET_TOOL_',
        env_file='.env',
        env_file_encoding='utf-8',
        env_nested_delimiter='__',
        extra='ignore',
        case_sensitive=False
    )

    # Environment
    environment: Environment = Field(default_factory=get_environment)

    # Dataset store
    database_url: str = Field(
        default="sqlite:///data/datasets.db",
        description="SQLAlchemy URL of the dataset store"
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements")

    # Presentation
    page_size: int = Field(default=10, ge=1, le=1000, description="Rows per table page")
    pie_slice_limit: int = Field(default=10, ge=1, le=100, description="Points kept for pie charts")

    # Paths
    data_path: Path = Field(default_factory=lambda: Path("data"))
    logs_path: Path = Field(default_factory=lambda: Path("logs"))
    schema_export_dir: Path = Field(default_factory=lambda: Path("schemas"))

    # Component configurations
    logging: LoggingConfig = Field(default_factory=get_default_logging_config)

    @field_validator('environment', mode='before')
    @classmethod
    def parse_environment(cls, v):
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    def get_engine_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``sqlalchemy.create_engine``."""
        options: Dict[str, Any] = {'echo': self.echo_sql, 'future': True}
        if self.database_url.startswith('sqlite'):
            options['connect_args'] = {'check_same_thread': False}
        return options

    def ensure_directories(self) -> None:
        """Ensure required directories exist."""
        for path in [self.data_path, self.logs_path]:
            path.mkdir(parents=True, exist_ok=True)


_settings: Optional[Settings] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get global settings instance.

    Uses LRU cache to ensure singleton behavior.
    """
    global _settings

    if _settings is None:
        _settings = Settings()
        _settings.ensure_directories()

        logger = logging.getLogger(__name__)
        logger.info(f"Settings loaded for environment: {_settings.environment.value}")

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment/files.

    Useful for testing or when configuration changes at runtime.
    """
    global _settings
    _settings = None
    get_settings.cache_clear()
    return get_settings()
