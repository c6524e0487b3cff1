"""Building blocks shared by resource managers.

Modules:
    pagination: Lazy iterators over paginated collections
    lookup: Exactly-one and ID-or-name lookups
    waiter: Polling for server-side state transitions
"""

from catalog_client_core.resources.lookup import exactly_one, get_by_id_or_name
from catalog_client_core.resources.pagination import (
    AsyncResourceIterator,
    Page,
    PageCursor,
    ResourceIterator,
    marker_fetch,
)
from catalog_client_core.resources.waiter import (
    AsyncDeletionWaiter,
    AsyncWaiter,
    DeletionWaiter,
    Waiter,
    WaitState,
)

__all__ = [
    "AsyncDeletionWaiter",
    "AsyncResourceIterator",
    "AsyncWaiter",
    "DeletionWaiter",
    "Page",
    "PageCursor",
    "ResourceIterator",
    "WaitState",
    "Waiter",
    "exactly_one",
    "get_by_id_or_name",
    "marker_fetch",
]
