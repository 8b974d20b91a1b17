"""REST client capability and request/response debug dumps.

:class:`RestClient` is the structural interface generated builders depend
on. :class:`DefaultRestClient` is the stock implementation. When a client
reports ``debug=True`` the generated code passes every outgoing request and
incoming response through :func:`debug_request` / :func:`debug_response`,
which log a readable dump at ``INFO`` level on this module's logger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

REQUEST_TAG = ">>>>>>>>>>>>>>>>>>>> REQUEST"
RESPONSE_TAG = "<<<<<<<<<<<<<<<<<<<< RESPONSE"
_FOOTER = "===================="


@runtime_checkable
class RestClient(Protocol):
    """Capability injected into every generated builder.

    Attributes:
        base_url: Prefix joined in front of each endpoint path.
        debug: When ``True``, requests and responses are dumped to the log.
        http_client: Transport used to send the built request.
    """

    base_url: str
    debug: bool
    http_client: httpx.Client


@dataclass
class DefaultRestClient:
    """Plain :class:`RestClient` implementation.

    Example::

        client = DefaultRestClient("https://api.example.com", debug=True)
    """

    base_url: str = ""
    debug: bool = False
    http_client: httpx.Client = field(default_factory=httpx.Client)


def debug_request(request: httpx.Request) -> None:
    """Log the request line, headers, and body of *request*."""
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{key}: {value}" for key, value in request.headers.items())
    body = _safe_body(request)
    if body:
        lines.extend(["", body])
    _log_dump(REQUEST_TAG, "\n".join(lines))


def debug_response(response: httpx.Response) -> None:
    """Log the status line and headers of *response*.

    The body is not read here: streamed responses are decoded afterwards by
    the response type and must not be consumed early.
    """
    lines = [f"HTTP {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{key}: {value}" for key, value in response.headers.items())
    _log_dump(RESPONSE_TAG, "\n".join(lines))


def _safe_body(request: httpx.Request) -> str:
    try:
        content = request.content
    except httpx.RequestNotRead:
        return "<streaming body>"
    return content.decode("utf-8", errors="replace")


def _log_dump(tag: str, text: str) -> None:
    logger.info("%s\n%s\n%s", tag, text, _FOOTER)
