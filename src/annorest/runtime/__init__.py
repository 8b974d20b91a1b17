"""Runtime support imported by generated request builders.

Generated code never looks up a process-wide client. Instead each builder
is constructed with a :class:`RestClient` capability that supplies the base
URL, the debug flag, and the :class:`httpx.Client` used as transport.

Example::

    import httpx
    from annorest.runtime import DefaultRestClient
    from photos.api_gen import new_photo_request

    client = DefaultRestClient("https://api.example.com", http_client=httpx.Client())
    photo, err = new_photo_request(client).photo_id("42").photo()
"""

from annorest.runtime.client import (
    DefaultRestClient,
    RestClient,
    debug_request,
    debug_response,
)

__all__ = ["RestClient", "DefaultRestClient", "debug_request", "debug_response"]
