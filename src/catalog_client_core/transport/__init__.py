"""HTTP transport for catalog services.

Modules:
    cache: Compute-once cell used for per-session service discovery
    session: httpx-based session issuing versioned requests to services

Example:
    ```python
    from catalog_client_core.transport import Session

    session = Session(settings)
    info = session.get_service_info(COMPUTE)
    ```
"""

from catalog_client_core.transport.cache import LazyValue
from catalog_client_core.transport.session import Session

__all__ = ["LazyValue", "Session"]
