"""Error kinds and HTTP fault handling."""

from catalog_client_core.errors.exceptions import (
    AmbiguousResultError,
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    UnauthorizedError,
    VersionMismatchError,
    WaitCancelledError,
    WaitError,
    WaitTimeoutError,
)
from catalog_client_core.errors.handler import raise_for_status
from catalog_client_core.errors.models import FaultDetail

__all__ = [
    "APIError",
    "AmbiguousResultError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "FaultDetail",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "VersionMismatchError",
    "WaitCancelledError",
    "WaitError",
    "WaitTimeoutError",
    "raise_for_status",
]
