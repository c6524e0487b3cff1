"""Compute-once cell for values shared by a session.

Service discovery (endpoint plus version range) is a network round trip
whose result must stay stable for the lifetime of a session: two threads
must never both run it, and a failed attempt must not be remembered.

Example:
    ```python
    from catalog_client_core.transport.cache import LazyValue

    info = LazyValue()
    info.ensure_value(lambda: discover("compute"))
    info.get()
    ```
"""

from collections.abc import Callable
from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyValue(Generic[T]):
    """Value computed at most once, on demand.

    The not-computed to computed transition happens once and never reverts.
    If the computation raises, the cell stays not computed and the next
    call tries again.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._computed = False
        self._value: T | None = None

    @property
    def computed(self) -> bool:
        return self._computed

    def ensure_value(self, compute: Callable[[], T]) -> None:
        """Run ``compute`` and store its result unless a value is already stored.

        Args:
            compute: Zero-argument callable producing the value. Exceptions
                propagate to the caller.
        """
        if self._computed:
            return

        with self._lock:
            # Double-check pattern for thread safety
            if self._computed:
                return

            self._value = compute()
            self._computed = True

    def get(self) -> T | None:
        """Return the stored value, or None if it was not computed yet."""
        return self._value if self._computed else None

    def get_or_compute(self, compute: Callable[[], T]) -> T:
        self.ensure_value(compute)
        return self._value  # type: ignore[return-value]
