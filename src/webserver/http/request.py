"""
=============================================================================
REQUEST LINE PARSING
=============================================================================

This server looks at exactly two things in a request: the METHOD and the
PATH. They are the first two whitespace-separated tokens of whatever a
single recv() returned:

    GET /calc/add/1/2 HTTP/1.1\r\nHost: localhost\r\n\r\n
    ─┬─ ───────┬───── ────────────────┬─────────────────
     │         │                      │
   method     path            ignored (version, headers, body)

Headers and bodies are never parsed. Whitespace means ASCII whitespace
(space, tab, CR, LF, VT, FF), the same set bytes.split() uses.

=============================================================================
DECODING
=============================================================================

Tokens are decoded as UTF-8 with surrogateescape. Undecodable bytes
survive the round trip, so os.fsencode(path) gives back the exact bytes
the client sent when the path is used to open a file.

=============================================================================
"""

from dataclasses import dataclass


@dataclass
class Request:
    """
    Parsed view of one read's worth of client bytes.

    Attributes:
        method: First token ("" if the data had none).
        path: Second token ("" if the data had fewer than two).
        raw: The bytes as read from the socket.
    """

    method: str
    path: str
    raw: bytes = b""


def _decode(token: bytes) -> str:
    return token.decode("utf-8", errors="surrogateescape")


def parse_request_line(data: bytes) -> Request:
    """
    Extract method and path from raw request bytes.

    Never raises: data with fewer than two tokens gives empty strings,
    which the router treats as not-found.

    Example:
        >>> parse_request_line(b"GET /sleep/1 HTTP/1.1\\r\\n\\r\\n")
        Request(method='GET', path='/sleep/1', raw=b'GET /sleep/1 HTTP/1.1\\r\\n\\r\\n')
    """
    tokens = data.split(maxsplit=2)
    method = _decode(tokens[0]) if len(tokens) > 0 else ""
    path = _decode(tokens[1]) if len(tokens) > 1 else ""
    return Request(method=method, path=path, raw=data)
