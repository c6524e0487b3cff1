"""Testing utilities for code built on catalog-client-core.

Example:
    ```python
    from catalog_client_core.testing import RecordingTransport, version_document


    def test_lists_servers():
        transport = RecordingTransport({
            ("GET", "/v2.1"): httpx.Response(200, json=version_document("2.79", "2.1")),
        })
        session = Session(settings, transport=transport)
        ...
    ```
"""

from catalog_client_core.testing.factories import RecordingTransport, fault_response, version_document

__all__ = ["RecordingTransport", "fault_response", "version_document"]
