"""Base class for resource managers."""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, ClassVar

from catalog_client_core.resources.pagination import ResourceIterator, _item_id, marker_fetch
from catalog_client_core.resources.waiter import DeletionWaiter
from catalog_client_core.transport.session import Session
from catalog_client_core.versioning.service import ServiceInfo, ServiceType
from catalog_client_core.versioning.versions import ApiVersion, Choice, Exact

logger = logging.getLogger(__name__)


class ResourceManager:
    """Base class for managers of one kind of resource on one service.

    Subclasses set ``service`` and implement resource-specific calls on top
    of the helpers below.
    """

    service: ClassVar[ServiceType]

    def __init__(self, session: Session) -> None:
        self.session = session

    def _info(self) -> ServiceInfo:
        return self.session.get_service_info(self.service)

    def _best_version(self, *versions: ApiVersion) -> ApiVersion | None:
        """Highest of ``versions`` the service supports, or None.

        For optional features: None means no version header is sent and the
        service's base behaviour applies.
        """
        return self._info().pick_api_version(Choice(versions))

    def _require_version(self, version: ApiVersion) -> ApiVersion:
        """Return ``version``, raising VersionMismatchError if unsupported."""
        return self.session.negotiate(self.service, Exact(version))

    def _paginate(
        self,
        path: Sequence[str],
        key: str,
        *,
        params: Mapping[str, Any] | None = None,
        limit: int | None = None,
        api_version: ApiVersion | None = None,
        marker_of: Callable[[Any], str] = _item_id,
    ) -> ResourceIterator[Any]:
        """Lazily iterate over the ``key`` list returned by ``GET path``.

        ``limit`` defaults to the session's page size.
        """
        if limit is None:
            limit = self.session.settings.page_size

        def list_items(query: dict[str, str]) -> list[Any]:
            return self.session.get_json(self.service, path, params=query, api_version=api_version)[key]

        logger.debug(f"Listing {'/'.join(path)} on {self.service.catalog_type} with {params}, page size {limit}")
        return ResourceIterator(marker_fetch(list_items, limit=limit, marker_of=marker_of, params=params))

    def _deletion_waiter(self, fetch: Callable[[], Any], description: str) -> DeletionWaiter:
        settings = self.session.settings
        return DeletionWaiter(
            fetch,
            poll_interval=settings.poll_interval,
            timeout=settings.wait_timeout,
            description=description,
        )
