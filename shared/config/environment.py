"""
Environment management for the dataset tool.

This module provides environment detection for the different deployment
environments (development, testing, production) and the defaults that hang
off them.
"""

import os
from enum import Enum
from functools import lru_cache


class Environment(str, Enum):
    """Supported deployment environments."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def is_development(self) -> bool:
        return self == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        return self == Environment.TESTING

    @property
    def is_staging(self) -> bool:
        return self == Environment.STAGING

    @property
    def is_production(self) -> bool:
        return self == Environment.PRODUCTION

    @property
    def log_level(self) -> str:
        """Get default log level for environment."""
        if self.is_production:
            return "WARNING"
        elif self.is_staging:
            return "INFO"
        else:
            return "DEBUG"


@lru_cache()
def get_environment() -> Environment:
    """
    Detect and return current environment.

    Uses the following precedence:
    1. ENVIRONMENT environment variable
    2. APP_ENV environment variable
    3. Defaults to DEVELOPMENT
    """
    for env_var in ('ENVIRONMENT', 'APP_ENV'):
        env_value = os.getenv(env_var)
        if env_value:
            try:
                return Environment(env_value.lower())
            except ValueError:
                # Unknown value, try the next variable
                continue

    return Environment.DEVELOPMENT


def override_environment(environment: Environment) -> None:
    """
    Override detected environment (useful for testing).

    This clears the LRU cache to force re-detection.
    """
    get_environment.cache_clear()
    os.environ['ENVIRONMENT'] = environment.value


def reset_environment() -> None:
    """Reset environment detection to auto-detect."""
    os.environ.pop('ENVIRONMENT', None)
    get_environment.cache_clear()
