"""Structured exceptions for API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from catalog_client_core.errors.models import FaultDetail
    from catalog_client_core.versioning.versions import ApiVersionRequest


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        fault: "FaultDetail | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.fault = fault


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found, or no resource matched a lookup."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """413/429 over limit."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass


class TransportError(APIError):
    """Request could not be sent or its response could not be decoded."""

    pass


class AmbiguousResultError(APIError):
    """More than one resource matched a lookup that expects exactly one."""

    pass


class VersionMismatchError(APIError):
    """No API version satisfies both the request and the service."""

    def __init__(
        self,
        message: str,
        requested: "ApiVersionRequest | None" = None,
        service: str | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.requested = requested
        self.service = service


class WaitError(APIError):
    """Base for waiter failures that are not raised by the check itself."""

    pass


class WaitTimeoutError(WaitError):
    """The awaited condition was not reached before the deadline."""

    def __init__(self, message: str, timeout: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout = timeout


class WaitCancelledError(WaitError):
    """The wait was interrupted by its cancellation event."""

    pass
