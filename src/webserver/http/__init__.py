"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

The small slice of HTTP/1.1 this server speaks:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST LINE (request.py)                                           │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   b"GET /calc/add/1/2 HTTP/1.1\r\nHost: ...\r\n\r\n"        │
    │ Output:  Request(method="GET", path="/calc/add/1/2", raw=...)       │
    │ Only the first two tokens are looked at.                            │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE WRITER (response.py)                                       │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Status line + Content-Type + Content-Length + Connection: close     │
    │ + body. Nothing else, ever.                                         │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ ROUTER (router.py)                                                  │
    │ ─────────────────────────────────────────────────────────────────── │
    │ GET only, literal prefixes in order: /static, /calc, /sleep.        │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ STATUS TAGS (status_codes.py) / CONTENT TYPES (content_types.py)    │
    │ ─────────────────────────────────────────────────────────────────── │
    │ HTTPStatus.OK / NOT_FOUND; substring-based static file labels.      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import Request, parse_request_line
from .response import (
    Response,
    text,           # text/plain body
    not_found,      # the <h1>404 Not Found</h1> page
    file_response,  # file bytes with an explicit length
)
from .router import Router, Route, Handler
from .status_codes import HTTPStatus
from .content_types import infer_content_type

__all__ = [
    # Request line
    "Request",
    "parse_request_line",

    # Response writing
    "Response",
    "text",
    "not_found",
    "file_response",

    # Routing
    "Router",
    "Route",
    "Handler",

    # Status tags
    "HTTPStatus",

    # Content types
    "infer_content_type",
]
