"""Lazy iteration over paginated collections.

A :class:`ResourceIterator` turns a page fetch function into a single
forward-only sequence. Pages are fetched one at a time, only when the items
of the previous page have all been consumed.

Example:
    ```python
    from catalog_client_core.resources.pagination import ResourceIterator, marker_fetch

    def list_servers(params):
        return session.get_json(COMPUTE, ["servers"], params=params)["servers"]

    for server in ResourceIterator(marker_fetch(list_servers, limit=100)):
        print(server["id"])
    ```
"""

import logging
from collections import deque
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from catalog_client_core.resources.lookup import exactly_one

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_NOT_FOUND_MESSAGE = "Resource not found"
DEFAULT_TOO_MANY_MESSAGE = "Too many resources found"


@dataclass(frozen=True)
class PageCursor:
    """Position of the next page: a marker (last seen ID) and a page size."""

    marker: str | None = None
    limit: int | None = None

    def to_params(self) -> dict[str, str]:
        params = {}
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.marker is not None:
            params["marker"] = self.marker
        return params


@dataclass
class Page(Generic[T]):
    """One page of items and the cursor of the page after it, if any."""

    items: list[T] = field(default_factory=list)
    next_cursor: PageCursor | None = None


FetchPage = Callable[[PageCursor | None], Page[T]]
AsyncFetchPage = Callable[[PageCursor | None], Awaitable[Page[T]]]


class _PagingState(Generic[T]):
    """Buffer, cursor and exhaustion flag shared by both iterator flavours."""

    def __init__(self) -> None:
        self._buffer: deque[T] = deque()
        self._cursor: PageCursor | None = None
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted and not self._buffer

    def _accept(self, page: Page[T]) -> None:
        # Only called with a successfully fetched page
        logger.debug(f"Received page of {len(page.items)} item(s), next cursor {page.next_cursor}")
        if not page.items or page.next_cursor is None:
            self._exhausted = True
        else:
            self._cursor = page.next_cursor
        self._buffer.extend(page.items)


class ResourceIterator(_PagingState[T]):
    """Forward-only lazy iterator over a paginated collection.

    Nothing is fetched before the first item is requested. A page without
    items or without a next cursor ends the sequence; after that no further
    fetches happen. If ``fetch`` raises, the exception propagates and the
    iterator state is unchanged, so the next call repeats the same request.

    Not restartable and not safe to advance from several threads at once.

    Args:
        fetch: Callable taking the current cursor (None for the first page)
            and returning a :class:`Page`
    """

    def __init__(self, fetch: FetchPage[T]) -> None:
        super().__init__()
        self._fetch = fetch

    def __iter__(self) -> "ResourceIterator[T]":
        return self

    def __next__(self) -> T:
        if not self._buffer:
            if self._exhausted:
                raise StopIteration
            self._accept(self._fetch(self._cursor))
            if not self._buffer:
                raise StopIteration
        return self._buffer.popleft()

    def one(
        self,
        not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE,
        too_many_message: str = DEFAULT_TOO_MANY_MESSAGE,
    ) -> T:
        """Consume the remaining items and return the only one.

        Raises:
            NotFoundError: If no items remain.
            AmbiguousResultError: If more than one item remains.
        """
        return exactly_one(self, not_found_message, too_many_message)


class AsyncResourceIterator(_PagingState[T]):
    """Async counterpart of :class:`ResourceIterator` for ``async for`` loops."""

    def __init__(self, fetch: AsyncFetchPage[T]) -> None:
        super().__init__()
        self._fetch = fetch

    def __aiter__(self) -> "AsyncResourceIterator[T]":
        return self

    async def __anext__(self) -> T:
        if not self._buffer:
            if self._exhausted:
                raise StopAsyncIteration
            self._accept(await self._fetch(self._cursor))
            if not self._buffer:
                raise StopAsyncIteration
        return self._buffer.popleft()

    async def one(
        self,
        not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE,
        too_many_message: str = DEFAULT_TOO_MANY_MESSAGE,
    ) -> T:
        return exactly_one([item async for item in self], not_found_message, too_many_message)


def _item_id(item: Any) -> str:
    return str(item["id"])


def marker_fetch(
    list_items: Callable[[dict[str, str]], list[T]],
    *,
    limit: int | None = None,
    marker_of: Callable[[T], str] = _item_id,
    params: Mapping[str, Any] | None = None,
) -> FetchPage[T]:
    """Build a page fetch function for marker-based pagination.

    Without a limit, the collection is fetched as a single unpaginated page.
    With a limit, every non-empty page continues after its last item.

    Args:
        list_items: Callable taking query parameters and returning the items
        limit: Page size, or None to disable pagination
        marker_of: Extracts the marker from an item (default: its "id")
        params: Extra query parameters sent with every page request

    Returns:
        Page fetch function for :class:`ResourceIterator`
    """
    base_params = {key: str(value) for key, value in (params or {}).items()}

    def fetch(cursor: PageCursor | None) -> Page[T]:
        cursor = cursor or PageCursor(limit=limit)
        items = list_items({**base_params, **cursor.to_params()})
        if limit is None or not items:
            return Page(items)
        return Page(items, PageCursor(marker=marker_of(items[-1]), limit=limit))

    return fetch
