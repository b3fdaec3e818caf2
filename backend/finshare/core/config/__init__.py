"""Configuration module for the Finshare backend.

Usage:
    from finshare.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from finshare.core.config.enums import Environment
from finshare.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
