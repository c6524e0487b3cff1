"""Custom exceptions for client configuration.

Example:
    ```python
    from catalog_client_core.config.exceptions import SettingNotFoundError

    if not token:
        raise SettingNotFoundError("Auth token not found", env_var_name="CATALOG_AUTH_TOKEN")
    ```
"""


class ConfigurationError(Exception):
    """Base exception for configuration errors.

    All configuration-specific exceptions inherit from this class,
    making it easy to catch any configuration-related error.
    """

    pass


class SettingNotFoundError(ConfigurationError):
    """Raised when a required setting cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        """Initialize SettingNotFoundError.

        Args:
            message: Error message describing what setting is missing.
            env_var_name: Optional environment variable name for reference.
        """
        super().__init__(message)
        self.env_var_name = env_var_name


class SettingValueError(ConfigurationError):
    """Raised when a setting is present but cannot be converted."""

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name
