"""Client settings resolved from explicit values, the environment and .env files.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

Example:
    ```python
    from catalog_client_core.config import SettingsResolver

    resolver = SettingsResolver()
    settings = resolver.load_settings()

    # CATALOG_ENDPOINT_COMPUTE=https://compute.example.com/v2.1
    settings.endpoints["compute"]
    ```

Security Considerations:
    - The auth token is never logged (masked with ***)
    - Only source information is logged (env var name, default, etc.)
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from dataclasses import dataclass, field
from threading import Lock

from dotenv import load_dotenv

from catalog_client_core.config.exceptions import SettingNotFoundError, SettingValueError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "CATALOG_"


@dataclass(frozen=True)
class ClientSettings:
    """Settings shared by a session and the resource managers using it.

    Attributes:
        endpoints: Service endpoint URLs keyed by catalog type.
        token: Token sent as ``X-Auth-Token``, if any.
        request_timeout: HTTP timeout in seconds.
        poll_interval: Seconds between status checks while waiting.
        wait_timeout: Seconds before a wait gives up.
        page_size: Page size for listings, or None to list without pagination.
    """

    endpoints: dict[str, str] = field(default_factory=dict)
    token: str | None = None
    request_timeout: float = 30.0
    poll_interval: float = 1.0
    wait_timeout: float = 300.0
    page_size: int | None = None


class SettingsResolver:
    """Resolve settings from multiple sources with priority ordering.

    Explicitly provided values take precedence over environment variables,
    which take precedence over .env file values, which finally take
    precedence over defaults.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize settings resolver.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to load .env file. Set to False to skip
                .env file loading (useful for testing).
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Ensure .env file is loaded (thread-safe, only once)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for settings resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Attempted either way, an unreadable .env file is not fatal
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        secret: bool = False,
    ) -> str | None:
        """Resolve a setting from multiple sources.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Default value if not found elsewhere.
            required: If True, raises SettingNotFoundError when the
                setting cannot be resolved.
            secret: If True, masks the value in log messages.

        Returns:
            Resolved value, or None if not found and not required.

        Raises:
            SettingNotFoundError: If required=True and the setting was not found.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if secret else result
            logger.debug(f"Resolved setting from {source}: {shown}")

        if required and result is None:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise SettingNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_float(
        self,
        *,
        value: float | None = None,
        env_var_name: str | None = None,
        default: float | None = None,
    ) -> float | None:
        """Resolve a setting and convert it to a float.

        Raises:
            SettingValueError: If the resolved value is not a number.
        """
        if value is not None:
            return float(value)
        raw = self.resolve(env_var_name=env_var_name)
        if raw is None:
            return default
        try:
            return float(raw)
        except ValueError:
            raise SettingValueError(
                f"Setting {env_var_name} must be a number, got {raw!r}", env_var_name=env_var_name
            ) from None

    def resolve_int(
        self,
        *,
        value: int | None = None,
        env_var_name: str | None = None,
        default: int | None = None,
    ) -> int | None:
        """Resolve a setting and convert it to an integer.

        Raises:
            SettingValueError: If the resolved value is not an integer.
        """
        if value is not None:
            return int(value)
        raw = self.resolve(env_var_name=env_var_name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            raise SettingValueError(
                f"Setting {env_var_name} must be an integer, got {raw!r}", env_var_name=env_var_name
            ) from None

    def resolve_endpoints(self, prefix: str = DEFAULT_PREFIX) -> dict[str, str]:
        """Collect service endpoints from ``<prefix>ENDPOINT_<TYPE>`` variables.

        The catalog type is the lower-cased suffix, with underscores turned
        into dashes (``CATALOG_ENDPOINT_BLOCK_STORAGE`` -> ``block-storage``).
        """
        marker = f"{prefix}ENDPOINT_"
        endpoints = {}
        for key, url in os.environ.items():
            if key.startswith(marker) and url:
                catalog_type = key[len(marker) :].lower().replace("_", "-")
                endpoints[catalog_type] = url
                logger.debug(f"Resolved endpoint for {catalog_type} from environment variable '{key}'")
        return endpoints

    def load_settings(self, prefix: str = DEFAULT_PREFIX) -> ClientSettings:
        """Build ClientSettings from the environment.

        Reads ``<prefix>AUTH_TOKEN``, ``<prefix>ENDPOINT_<TYPE>``,
        ``<prefix>REQUEST_TIMEOUT``, ``<prefix>POLL_INTERVAL``,
        ``<prefix>WAIT_TIMEOUT`` and ``<prefix>PAGE_SIZE``.
        """
        defaults = ClientSettings()
        return ClientSettings(
            endpoints=self.resolve_endpoints(prefix),
            token=self.resolve(env_var_name=f"{prefix}AUTH_TOKEN", secret=True),
            request_timeout=self.resolve_float(
                env_var_name=f"{prefix}REQUEST_TIMEOUT", default=defaults.request_timeout
            ),
            poll_interval=self.resolve_float(env_var_name=f"{prefix}POLL_INTERVAL", default=defaults.poll_interval),
            wait_timeout=self.resolve_float(env_var_name=f"{prefix}WAIT_TIMEOUT", default=defaults.wait_timeout),
            page_size=self.resolve_int(env_var_name=f"{prefix}PAGE_SIZE", default=defaults.page_size),
        )
