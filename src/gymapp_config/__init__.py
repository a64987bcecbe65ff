"""Process-wide configuration for the GymApp service.

Settings are loaded once at startup and are immutable afterwards.
"""

from .settings import (
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
