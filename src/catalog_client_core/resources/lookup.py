"""Helpers for resolving a human-given name or ID to one resource."""

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from catalog_client_core.errors.exceptions import AmbiguousResultError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def exactly_one(candidates: Iterable[T], not_found_message: str, too_many_message: str) -> T:
    """Return the only candidate.

    Consumes the whole iterable, so a lazy source is fully fetched.

    Args:
        candidates: Matching resources
        not_found_message: Message for the zero-candidates error
        too_many_message: Message for the many-candidates error

    Returns:
        The single candidate

    Raises:
        NotFoundError: If there are no candidates.
        AmbiguousResultError: If there is more than one candidate.
    """
    items = list(candidates)
    if not items:
        raise NotFoundError(not_found_message)
    if len(items) > 1:
        raise AmbiguousResultError(too_many_message)
    return items[0]


def get_by_id_or_name(value: str, by_id: Callable[[str], T], by_name: Callable[[str], T]) -> T:
    """Look a resource up by ID, falling back to its name if the ID is unknown.

    Only NotFoundError triggers the fallback; any other error propagates.
    """
    try:
        return by_id(value)
    except NotFoundError:
        logger.debug(f"No resource with ID {value}, looking it up by name")
        return by_name(value)
