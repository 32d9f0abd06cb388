"""
=============================================================================
RESPONSE STATUS TAGS
=============================================================================

Every response produced by a handler carries one of two outcomes:

    ┌────────┬────────────────────────────────────────────────────────────┐
    │  200   │ OK         - file served, calculation done, sleep done     │
    │  404   │ NOT FOUND  - bad path, missing file, wrong method, no route │
    └────────┴────────────────────────────────────────────────────────────┘

On the wire BOTH are written as "HTTP/1.1 200 OK" by default. The server
has no concept of a non-200 status line; a not-found outcome is told apart
only by its HTML body:

    HTTP/1.1 200 OK
    Content-Type: text/html
    Content-Length: 22
    Connection: close

    <h1>404 Not Found</h1>

The tag is still tracked so that logging can tell the two apart, and so
that ServerConfig.real_status_codes can put the real code on the wire.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    Outcome of handling one request.

    IntEnum, so it can be formatted straight into a status line:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200            # Handler produced its normal body
    NOT_FOUND = 404     # Soft failure, body is the not-found page

    @property
    def phrase(self) -> str:
        """Reason phrase used after the code in a status line."""
        return _STATUS_PHRASES[self]


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "Not Found",
}
