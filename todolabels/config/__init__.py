"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from todolabels.config import settings

    print(settings.storage_backend)
"""

from todolabels.config.settings import Settings, settings, get_settings, print_settings

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "print_settings",
]
