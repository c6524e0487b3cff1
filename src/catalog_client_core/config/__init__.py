"""Client configuration.

Settings are resolved from explicit values, environment variables, a .env
file and defaults, in that order.

Example:
    ```python
    from catalog_client_core.config import SettingsResolver

    settings = SettingsResolver().load_settings()
    ```
"""

from catalog_client_core.config.exceptions import (
    ConfigurationError,
    SettingNotFoundError,
    SettingValueError,
)
from catalog_client_core.config.settings import ClientSettings, SettingsResolver

__all__ = [
    "ClientSettings",
    "ConfigurationError",
    "SettingNotFoundError",
    "SettingValueError",
    "SettingsResolver",
]
