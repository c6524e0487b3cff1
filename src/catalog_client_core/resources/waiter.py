"""Polling until remote state reaches a target condition.

A waiter repeatedly calls a check function until it reports success, the
check raises, or the deadline passes:

| Check outcome | State | Result |
|---------------|-------|--------|
| returns True | SUCCEEDED | `wait()` returns |
| raises | FAILED | the exception propagates, no more polling |
| returns False, deadline passed | TIMED_OUT | `WaitTimeoutError` |
| returns False otherwise | WAITING | sleep, then check again |

## Deletion example

```python
from catalog_client_core.resources.waiter import DeletionWaiter

session.delete(COMPUTE, ["servers", server_id])
DeletionWaiter(
    lambda: session.get_json(COMPUTE, ["servers", server_id]),
    poll_interval=1.0,
    timeout=120.0,
    description=f"server {server_id}",
).wait()
```
"""

import asyncio
import enum
import logging
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Any

from catalog_client_core.errors.exceptions import (
    NotFoundError,
    WaitCancelledError,
    WaitTimeoutError,
)

logger = logging.getLogger(__name__)


class WaitState(enum.Enum):
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class _WaiterBase:
    """Deadline and state bookkeeping shared by sync and async waiters."""

    def __init__(self, *, poll_interval: float, timeout: float, description: str = "resource") -> None:
        if poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative, got {poll_interval}")
        if timeout < 0:
            raise ValueError(f"timeout must not be negative, got {timeout}")
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.description = description
        self.state = WaitState.WAITING
        self.attempts = 0

    def _start(self) -> float:
        self.state = WaitState.WAITING
        self.attempts = 0
        return time.monotonic() + self.timeout

    def _succeed(self) -> None:
        self.state = WaitState.SUCCEEDED
        logger.debug(f"Wait for {self.description} succeeded after {self.attempts} check(s)")

    def _fail(self, error: BaseException) -> None:
        self.state = WaitState.FAILED
        logger.debug(f"Wait for {self.description} failed on check #{self.attempts}: {error!r}")

    def _next_delay(self, deadline: float) -> float:
        """Return how long to sleep before the next check.

        Raises:
            WaitTimeoutError: If the deadline has passed.
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            self.state = WaitState.TIMED_OUT
            logger.warning(
                f"Timed out after {self.timeout}s waiting for {self.description} ({self.attempts} check(s))"
            )
            raise WaitTimeoutError(
                f"Timed out after {self.timeout}s waiting for {self.description}",
                timeout=self.timeout,
            )
        delay = min(self.poll_interval, remaining)
        logger.debug(
            f"{self.description} not ready after check #{self.attempts}, checking again in {delay:.3f}s"
        )
        return delay


class Waiter(_WaiterBase):
    """Block until ``check`` returns True.

    Args:
        check: Zero-argument callable; True when the target state is reached
        poll_interval: Seconds between checks
        timeout: Seconds before giving up
        description: What is being waited for, used in logs and errors
        cancel_event: Optional event; setting it interrupts the sleep and
            aborts the wait with WaitCancelledError
    """

    def __init__(
        self,
        check: Callable[[], bool],
        *,
        poll_interval: float,
        timeout: float,
        description: str = "resource",
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(poll_interval=poll_interval, timeout=timeout, description=description)
        self._check = check
        self._cancel_event = cancel_event

    def wait(self) -> None:
        """Poll until the condition holds.

        Raises:
            WaitTimeoutError: If the deadline passes first.
            WaitCancelledError: If the cancel event is set while waiting.
            Any exception raised by the check.
        """
        deadline = self._start()
        while True:
            self.attempts += 1
            try:
                done = self._check()
            except Exception as e:
                self._fail(e)
                raise

            if done:
                self._succeed()
                return

            delay = self._next_delay(deadline)
            if self._cancel_event is None:
                time.sleep(delay)
            elif self._cancel_event.wait(delay):
                error = WaitCancelledError(f"Wait for {self.description} was cancelled")
                self._fail(error)
                raise error


class AsyncWaiter(_WaiterBase):
    """Await until ``check`` returns True.

    Same contract as :class:`Waiter`; the sleep is ``asyncio.sleep``, so
    cancelling the task interrupts it (the state becomes FAILED).
    """

    def __init__(
        self,
        check: Callable[[], Awaitable[bool]],
        *,
        poll_interval: float,
        timeout: float,
        description: str = "resource",
    ) -> None:
        super().__init__(poll_interval=poll_interval, timeout=timeout, description=description)
        self._check = check

    async def wait(self) -> None:
        deadline = self._start()
        while True:
            self.attempts += 1
            try:
                done = await self._check()
            except Exception as e:
                self._fail(e)
                raise

            if done:
                self._succeed()
                return

            delay = self._next_delay(deadline)
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError as e:
                self._fail(e)
                raise


class DeletionWaiter(Waiter):
    """Wait until a resource is gone.

    ``fetch`` looks the resource up. NotFoundError means it was deleted; a
    successful lookup means it still exists; any other error is fatal.
    """

    def __init__(
        self,
        fetch: Callable[[], Any],
        *,
        poll_interval: float,
        timeout: float,
        description: str = "resource",
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(
            self._is_deleted,
            poll_interval=poll_interval,
            timeout=timeout,
            description=description,
            cancel_event=cancel_event,
        )
        self._fetch = fetch

    def _is_deleted(self) -> bool:
        try:
            self._fetch()
        except NotFoundError:
            return True
        return False


class AsyncDeletionWaiter(AsyncWaiter):
    """Async counterpart of :class:`DeletionWaiter`."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        *,
        poll_interval: float,
        timeout: float,
        description: str = "resource",
    ) -> None:
        super().__init__(self._is_deleted, poll_interval=poll_interval, timeout=timeout, description=description)
        self._fetch = fetch

    async def _is_deleted(self) -> bool:
        try:
            await self._fetch()
        except NotFoundError:
            return True
        return False
