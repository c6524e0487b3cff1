"""HTTP session bound to a set of service endpoints.

The session owns the ``httpx.Client``, the auth token and one lazily
discovered :class:`~catalog_client_core.versioning.ServiceInfo` per service.
Every request is built relative to the discovered root URL and carries the
version header of the negotiated API version, if any.

Example:
    ```python
    from catalog_client_core.compute import COMPUTE
    from catalog_client_core.config import ClientSettings
    from catalog_client_core.transport import Session
    from catalog_client_core.versioning import Latest

    settings = ClientSettings(
        endpoints={"compute": "https://compute.example.com/v2.1"},
        token="gAAAAAB...",
    )
    with Session(settings) as session:
        version = session.negotiate(COMPUTE, Latest())
        servers = session.get_json(COMPUTE, ["servers"], api_version=version)
    ```
"""

import logging
from collections.abc import Mapping, Sequence
from threading import Lock
from typing import Any
from urllib.parse import quote

import httpx

from catalog_client_core.config.exceptions import ConfigurationError
from catalog_client_core.config.settings import ClientSettings
from catalog_client_core.errors.exceptions import (
    NotFoundError,
    TransportError,
    VersionMismatchError,
)
from catalog_client_core.errors.handler import raise_for_status
from catalog_client_core.transport.cache import LazyValue
from catalog_client_core.versioning.service import ServiceInfo, ServiceType
from catalog_client_core.versioning.versions import ApiVersion, ApiVersionRequest

logger = logging.getLogger(__name__)

Path = str | Sequence[str]


class Session:
    """Authenticated HTTP access to catalog services.

    Args:
        settings: Client settings; endpoints and token are taken from here
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        token: Overrides ``settings.token``
        endpoints: Overrides ``settings.endpoints``
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        token: str | None = None,
        endpoints: Mapping[str, str] | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self._token = token if token is not None else self.settings.token
        self._endpoints = dict(endpoints if endpoints is not None else self.settings.endpoints)
        self._client = httpx.Client(transport=transport, timeout=self.settings.request_timeout)
        self._service_info: dict[str, LazyValue[ServiceInfo]] = {}
        self._service_info_lock = Lock()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_endpoint(self, service: ServiceType) -> str:
        """Return the configured endpoint of ``service``.

        Raises:
            ConfigurationError: If no endpoint is configured.
        """
        try:
            return self._endpoints[service.catalog_type]
        except KeyError:
            raise ConfigurationError(f"No endpoint configured for service {service.catalog_type}") from None

    def get_service_info(self, service: ServiceType) -> ServiceInfo:
        """Return the service info, discovering it on first use."""
        with self._service_info_lock:
            cell = self._service_info.setdefault(service.catalog_type, LazyValue())
        return cell.get_or_compute(lambda: self._discover(service))

    def negotiate(self, service: ServiceType, request: ApiVersionRequest) -> ApiVersion:
        """Pick an API version for ``request``.

        Raises:
            VersionMismatchError: If the service supports no matching version.
        """
        info = self.get_service_info(service)
        version = info.pick_api_version(request)
        if version is None:
            raise VersionMismatchError(
                f"Service {service.catalog_type} supports versions {info.minimum_version} to "
                f"{info.current_version}, none of which satisfies {request}",
                requested=request,
                service=service.catalog_type,
            )
        logger.debug(f"Negotiated {service.catalog_type} API version {version} for {request}")
        return version

    def supports_api_version(self, service: ServiceType, version: ApiVersion) -> bool:
        return self.get_service_info(service).supports_api_version(version)

    def request(
        self,
        service: ServiceType,
        method: str,
        path: Path,
        *,
        api_version: ApiVersion | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request relative to the service root URL.

        Args:
            service: Target service
            method: HTTP method
            path: Path segments (quoted individually) or a relative path string
            api_version: Version to request via the service's version header
            params: Query parameters
            json: JSON body

        Returns:
            Successful HTTP response

        Raises:
            APIError subclass for error responses, TransportError if the
            request could not be sent
        """
        url = self._build_url(self.get_service_info(service).root_url, path)
        headers = self._headers()
        if api_version is not None:
            headers.update(service.api_version_headers(api_version))
        return self._send(method, url, headers=headers, params=params, json=json)

    def get_json(self, service: ServiceType, path: Path, **kwargs: Any) -> Any:
        return _decode_json(self.request(service, "GET", path, **kwargs))

    def post_json(self, service: ServiceType, path: Path, json: Any, **kwargs: Any) -> Any:
        return _decode_json(self.request(service, "POST", path, json=json, **kwargs))

    def put_json(self, service: ServiceType, path: Path, json: Any, **kwargs: Any) -> Any:
        return _decode_json(self.request(service, "PUT", path, json=json, **kwargs))

    def patch_json(self, service: ServiceType, path: Path, json: Any, **kwargs: Any) -> Any:
        return _decode_json(self.request(service, "PATCH", path, json=json, **kwargs))

    def delete(self, service: ServiceType, path: Path, **kwargs: Any) -> httpx.Response:
        return self.request(service, "DELETE", path, **kwargs)

    def _discover(self, service: ServiceType) -> ServiceInfo:
        endpoint = self.get_endpoint(service)
        logger.debug(f"Discovering {service.catalog_type} API at {endpoint}")
        try:
            response = self._send("GET", endpoint, headers=self._headers(), allow_multiple_choices=True)
        except NotFoundError:
            logger.debug(f"No version document at {endpoint}, assuming unversioned API")
            return ServiceInfo(root_url=endpoint)
        try:
            document = response.json()
        except ValueError:
            document = None
        if not isinstance(document, Mapping):
            return ServiceInfo(root_url=endpoint)
        try:
            return ServiceInfo.from_version_document(endpoint, document, service)
        except ValueError as e:
            raise TransportError(f"Invalid version document at {endpoint}: {e}", response=response) from e

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["X-Auth-Token"] = self._token
        return headers

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        allow_multiple_choices: bool = False,
    ) -> httpx.Response:
        logger.debug(f"Sending HTTP {method} request to {url} with params {params}")
        try:
            response = self._client.request(method, url, headers=headers, params=params, json=json)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP {method} {url} failed: {e}") from e

        # Multiple choices is how some services answer an unversioned root
        if allow_multiple_choices and response.status_code == 300:
            return response
        raise_for_status(response)
        logger.debug(f"HTTP {method} {url} returned {response.status_code}")
        return response

    @staticmethod
    def _build_url(root_url: str, path: Path) -> str:
        if isinstance(path, str):
            suffix = path.lstrip("/")
        else:
            suffix = "/".join(quote(str(segment), safe="") for segment in path)
        if not suffix:
            return root_url
        return f"{root_url.rstrip('/')}/{suffix}"


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"Invalid JSON in response from {response.request.method} {response.request.url}: {e}",
            status_code=response.status_code,
            response=response,
        ) from e
