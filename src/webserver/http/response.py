"""
=============================================================================
HTTP RESPONSE WRITER
=============================================================================

Every response this server sends has exactly the same shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                  ← status line (always 200)   │
    │    Content-Type: text/plain\r\n         ← chosen by the handler      │
    │    Content-Length: 10\r\n               ← byte length passed in      │
    │    Connection: close\r\n                ← on every response          │
    │    \r\n                                 ← end of headers             │
    │    Result: 3\n                          ← body bytes                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

No Date, no Server, no other headers. Clients that compare responses
byte-for-byte rely on that, so to_bytes() never adds anything.

=============================================================================
CONTENT-LENGTH
=============================================================================

Content-Length is whatever content_length says. It defaults to len(body),
which is what every handler wants. The static file handler passes the
size reported by fstat() explicitly; the two agree for regular files.

A mismatched value is written as-is (the client will then wait for bytes
that never come, or treat the tail as the next response), so callers that
pass content_length must keep it consistent with body.

=============================================================================
STATUS TAG VS. STATUS LINE
=============================================================================

    Response.status          What goes on the wire
    ─────────────────        ─────────────────────────────────────────
    HTTPStatus.OK            HTTP/1.1 200 OK
    HTTPStatus.NOT_FOUND     HTTP/1.1 200 OK          (default)
                             HTTP/1.1 404 Not Found   (real_status=True)

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional, Union

from .status_codes import HTTPStatus
from .content_types import TEXT_PLAIN, TEXT_HTML


NOT_FOUND_BODY = b"<h1>404 Not Found</h1>"
DIVISION_BY_ZERO_BODY = "Error: Division by zero"


@dataclass
class Response:
    """
    One response, constructed fresh per request and discarded after writing.

    Attributes:
        content_type: Value of the Content-Type header.
        body: Body bytes.
        content_length: Value of the Content-Length header (None = len(body)).
        status: Internal outcome tag; see the module docstring.
    """

    content_type: str
    body: bytes = b""
    content_length: Optional[int] = None
    status: HTTPStatus = HTTPStatus.OK
    version: str = "HTTP/1.1"

    @property
    def length(self) -> int:
        """The Content-Length that will be written."""
        if self.content_length is None:
            return len(self.body)
        return self.content_length

    def status_line(self, real_status: bool = False) -> str:
        """
        Format the status line.

        Args:
            real_status: Put the tag's own code on the wire instead of 200.
        """
        status = self.status if real_status else HTTPStatus.OK
        return f"{self.version} {status.value} {status.phrase}"

    def head_bytes(self, real_status: bool = False) -> bytes:
        """Status line and the three headers, terminated by the blank line."""
        lines = [
            self.status_line(real_status),
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.length}",
            "Connection: close",
            "",
            "",
        ]
        return "\r\n".join(lines).encode("latin-1")

    def to_bytes(self, real_status: bool = False) -> bytes:
        """
        Serialize headers followed immediately by the body.

        Returns:
            Complete response ready for socket.sendall().
        """
        return self.head_bytes(real_status) + self.body


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Handlers build their responses through these, e.g.
#
#     return text(f"Result: {result}\n")
#     return not_found()
#
# =============================================================================

def text(body: Union[str, bytes]) -> Response:
    """Create a text/plain response."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return Response(content_type=TEXT_PLAIN, body=body)


def not_found() -> Response:
    """
    Create the not-found response.

    Used for every soft failure: unknown route, non-GET method, malformed
    path parameters, files that cannot be opened.
    """
    return Response(
        content_type=TEXT_HTML,
        body=NOT_FOUND_BODY,
        status=HTTPStatus.NOT_FOUND,
    )


def file_response(content: bytes, content_type: str, size: int) -> Response:
    """
    Create a response carrying a file read from disk.

    Args:
        content: The file bytes.
        content_type: Inferred Content-Type.
        size: Size reported by fstat(), used as Content-Length.
    """
    return Response(content_type=content_type, body=content, content_length=size)
