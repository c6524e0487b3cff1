"""Service descriptions and API version negotiation."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, assert_never

from catalog_client_core.errors.exceptions import VersionMismatchError
from catalog_client_core.versioning.versions import (
    ApiVersion,
    ApiVersionRequest,
    Choice,
    Exact,
    Latest,
    Minimum,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceType:
    """Static description of a service type.

    Args:
        catalog_type: Service type as listed in the catalog (e.g. "compute")
        major_version: Supported major API version, or None for any
        version_header: Header carrying the negotiated version, or None if
            the service has no version negotiation

    Example:
        ```python
        COMPUTE = ServiceType(
            "compute",
            major_version=2,
            version_header="X-OpenStack-Nova-API-Version",
        )
        ```
    """

    catalog_type: str
    major_version: int | None = None
    version_header: str | None = None

    def major_version_supported(self, version: ApiVersion) -> bool:
        return self.major_version is None or version.major == self.major_version

    def api_version_headers(self, version: ApiVersion) -> dict[str, str]:
        """Return the headers that select ``version`` on this service.

        Raises:
            VersionMismatchError: If the service does not negotiate versions.
        """
        if self.version_header is None:
            raise VersionMismatchError(
                f"Service {self.catalog_type} does not support API version negotiation",
                requested=Exact(version),
                service=self.catalog_type,
            )
        return {self.version_header: str(version)}


@dataclass(frozen=True)
class ServiceInfo:
    """Root endpoint and version range advertised by a service.

    Either bound may be None when the service does not advertise it.
    """

    root_url: str
    current_version: ApiVersion | None = None
    minimum_version: ApiVersion | None = None

    def __post_init__(self) -> None:
        if (
            self.current_version is not None
            and self.minimum_version is not None
            and self.minimum_version > self.current_version
        ):
            raise ValueError(
                f"Minimum version {self.minimum_version} is above current version {self.current_version}"
            )

    def pick_api_version(self, request: ApiVersionRequest) -> ApiVersion | None:
        """Pick the version to use for ``request``, or None if there is none.

        ``Minimum`` and ``Latest`` return the advertised bound as is. ``Exact``
        and ``Choice`` need the current version; without a known minimum only
        the current version itself is acceptable.

        Note the two ``Choice`` branches differ: with a known minimum the
        highest acceptable candidate wins, without one the first candidate
        equal to the current version wins. Callers rely on both.

        Args:
            request: Version request policy

        Returns:
            Selected version, or None if no version satisfies the request
        """
        match request:
            case Minimum():
                return self.minimum_version
            case Latest():
                return self.current_version
            case Exact(version=version):
                if self.current_version is None:
                    return None
                if self.minimum_version is not None:
                    if self.minimum_version <= version <= self.current_version:
                        return version
                    return None
                return version if version == self.current_version else None
            case Choice(versions=versions):
                if not versions or self.current_version is None:
                    return None
                if self.minimum_version is not None:
                    acceptable = [v for v in versions if self.minimum_version <= v <= self.current_version]
                    return max(acceptable) if acceptable else None
                return next((v for v in versions if v == self.current_version), None)
            case _:
                assert_never(request)

    def supports_api_version(self, version: ApiVersion) -> bool:
        return self.pick_api_version(Exact(version)) is not None

    @classmethod
    def from_version_document(
        cls,
        endpoint: str,
        document: Mapping[str, Any],
        service: ServiceType,
    ) -> "ServiceInfo":
        """Build service info from the JSON returned by a service root.

        Accepts a single ``{"version": {...}}`` entry or a ``{"versions": [...]}``
        listing. From a listing, the entry with a supported major version is
        used, preferring the one marked ``CURRENT``.

        Args:
            endpoint: URL the document was fetched from
            document: Decoded response body
            service: Service the document belongs to

        Returns:
            ServiceInfo; versions are None when not advertised
        """
        entry = document.get("version")
        if entry is None:
            entry = _select_version_entry(document.get("versions"), service)
        if not isinstance(entry, Mapping):
            logger.debug(f"No version information for {service.catalog_type} at {endpoint}")
            return cls(root_url=endpoint)

        current = _parse_optional(entry.get("version") or entry.get("max_version"))
        minimum = _parse_optional(entry.get("min_version"))
        root_url = _self_link(entry) or endpoint

        info = cls(root_url=root_url, current_version=current, minimum_version=minimum)
        logger.debug(
            f"Service {service.catalog_type} at {root_url} supports versions {minimum} to {current}"
        )
        return info


def _parse_optional(value: Any) -> ApiVersion | None:
    if not value:
        return None
    return ApiVersion.parse(str(value))


def _self_link(entry: Mapping[str, Any]) -> str | None:
    for link in entry.get("links") or []:
        if isinstance(link, Mapping) and link.get("rel") == "self" and link.get("href"):
            return str(link["href"])
    return None


def _select_version_entry(entries: Any, service: ServiceType) -> Mapping[str, Any] | None:
    if not isinstance(entries, list):
        return None

    supported = []
    for entry in entries:
        if not isinstance(entry, Mapping) or "id" not in entry:
            continue
        try:
            major = ApiVersion.parse(str(entry["id"]))
        except ValueError:
            continue
        if service.major_version_supported(major):
            supported.append(entry)

    for entry in supported:
        if str(entry.get("status", "")).upper() == "CURRENT":
            return entry
    return supported[0] if supported else None
