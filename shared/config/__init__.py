"""
Configuration management for the dataset tool.

This module provides centralized configuration management with support for
environment variables, .env files, and logging setup.
"""

from .settings import Settings, get_settings, reload_settings
from .logging_config import setup_logging, LoggingConfig
from .environment import Environment, get_environment, override_environment, reset_environment

__all__ = [
    'Settings',
    'get_settings',
    'reload_settings',
    'setup_logging',
    'LoggingConfig',
    'Environment',
    'get_environment',
    'override_environment',
    'reset_environment',
]

__version__ = '1.0.0'
