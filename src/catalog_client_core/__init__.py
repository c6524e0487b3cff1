"""Catalog Client Core - Shared runtime library for versioned cloud service APIs.

This library provides the patterns every resource-specific call relies on:
- API version negotiation against a service's advertised version range
- Lazy, on-demand iteration over paginated collections
- Exactly-one lookups by name
- Polling waiters for server-side state transitions (e.g. deletion)

Example:
    ```python
    from catalog_client_core.compute import ServerManager
    from catalog_client_core.config import SettingsResolver
    from catalog_client_core.transport import Session

    settings = SettingsResolver().load_settings()

    with Session(settings) as session:
        servers = ServerManager(session)
        for server in servers.list(limit=50):
            print(server["name"])

        servers.delete(servers.get("web-1")["id"]).wait()
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
