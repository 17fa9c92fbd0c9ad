"""
Logging configuration for the dataset tool.

This module provides centralized logging setup with support for file rotation,
structured (JSON) logging, and environment-specific defaults.
"""

import logging
import logging.handlers
import sys
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from .environment import get_environment


class LoggingConfig(BaseModel):
    """Logging configuration model."""
    model_config = ConfigDict(extra='forbid')

    # Basic settings
    level: str = Field(default="INFO", description="Root logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        description="Log message format"
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log messages"
    )

    # File logging
    enable_file_logging: bool = Field(default=True)
    log_file_path: str = Field(default="logs/dataset_tool.log")
    max_file_size_mb: int = Field(default=10, ge=1, le=1000)
    backup_count: int = Field(default=5, ge=1, le=50)

    # Console logging
    enable_console_logging: bool = Field(default=True)
    console_level: str = Field(default="INFO")

    # Structured logging
    enable_json_logging: bool = Field(default=False)

    # Component-specific logging levels
    component_levels: Dict[str, str] = Field(default_factory=dict)

    # Filtering
    suppress_noisy_loggers: bool = Field(default=True)
    noisy_loggers: list[str] = Field(
        default_factory=lambda: [
            'sqlalchemy.engine',
            'sqlalchemy.pool',
        ]
    )


# LogRecord attributes that are not copied into the JSON payload as extras
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime',
}


class StructuredFormatter(logging.Formatter):
    """Formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Anything passed through ``extra=`` ends up on the record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Setup centralized logging configuration.

    Args:
        config: Optional logging configuration. If not provided, will use
                environment-appropriate defaults.

    Returns:
        Root logger instance
    """
    if config is None:
        config = get_default_logging_config()

    root_logger = logging.getLogger()

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    if config.enable_file_logging:
        _setup_file_logging(root_logger, config)

    if config.enable_console_logging:
        _setup_console_logging(root_logger, config)

    _setup_component_levels(config)

    if config.suppress_noisy_loggers:
        _suppress_noisy_loggers(config.noisy_loggers)

    root_logger.debug(f"Logging configured for environment: {get_environment().value}")
    return root_logger


def _build_formatter(config: LoggingConfig, fmt: str) -> logging.Formatter:
    if config.enable_json_logging:
        return StructuredFormatter()
    return logging.Formatter(fmt=fmt, datefmt=config.date_format)


def _setup_file_logging(logger: logging.Logger, config: LoggingConfig) -> None:
    """Setup file logging with rotation."""
    log_path = Path(config.log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=config.log_file_path,
        maxBytes=config.max_file_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(_build_formatter(config, config.format))
    file_handler.setLevel(getattr(logging, config.level.upper()))

    logger.addHandler(file_handler)


def _setup_console_logging(logger: logging.Logger, config: LoggingConfig) -> None:
    """Setup console logging."""
    # stderr keeps command output on stdout clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        _build_formatter(config, "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    console_handler.setLevel(getattr(logging, config.console_level.upper()))

    logger.addHandler(console_handler)


def _setup_component_levels(config: LoggingConfig) -> None:
    for logger_name, level in config.component_levels.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))


def _suppress_noisy_loggers(noisy_loggers: list[str]) -> None:
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_default_logging_config() -> LoggingConfig:
    """Get default logging configuration based on environment."""
    env = get_environment()

    config_dict = {
        'level': env.log_level,
        'enable_console_logging': True,
        'enable_file_logging': True,
        'suppress_noisy_loggers': True
    }

    if env.is_development:
        config_dict.update({
            'console_level': 'INFO',
            'enable_json_logging': False,
        })
    elif env.is_testing:
        config_dict.update({
            'console_level': 'WARNING',  # Reduce noise in tests
            'enable_file_logging': False,
            'enable_json_logging': False,
        })
    elif env.is_production:
        config_dict.update({
            'console_level': 'WARNING',
            'enable_json_logging': True,
            'max_file_size_mb': 100,
            'backup_count': 10
        })

    return LoggingConfig(**config_dict)
