"""Error handling utilities for HTTP responses."""

import httpx

from catalog_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from catalog_client_core.errors.models import FaultDetail

EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    413: RateLimitError,
    429: RateLimitError,
}


def raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate exception for HTTP error responses.

    Parses the service fault body if present, otherwise uses the HTTP
    status code and response text.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    fault = FaultDetail.from_response(response)
    status_code = response.status_code

    if status_code in EXCEPTION_MAP:
        exc_class = EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    if fault:
        message = fault.to_exception_message()
    else:
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    if exc_class is RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        raise exc_class(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
            fault=fault,
        )

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        fault=fault,
    )
