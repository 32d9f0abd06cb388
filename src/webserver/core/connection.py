"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket. A Connection belongs to exactly one
worker thread from accept() until close(); it is never handed over or
pooled.

=============================================================================
ONE READ = ONE REQUEST
=============================================================================

TCP is a byte stream and does not preserve message boundaries. A full HTTP
server buffers until it sees \r\n\r\n. This one does NOT:

    read_request()
        │
        └──► socket.recv(buffer_size)      ← exactly one call
                 │
                 ├── b""         peer closed      → None (worker stops)
                 ├── OSError     reset, etc.      → None (worker stops)
                 └── b"GET ..."  whatever arrived → that IS the request

Consequences, all accepted:

    - A request split across two TCP segments is seen as two requests.
    - A request line longer than buffer_size is cut; the tail arrives as
      the next "request".
    - Two pipelined requests in one segment are seen as one request
      (only the first request line counts).

Clients that send one request and wait for its response before sending
the next get exactly one response per request.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──► READING ──► PROCESSING ──► WRITING ──┐
               ▲                                 │
               └─────────────────────────────────┘
               │
               ▼  (empty read / error)
            CLOSED

The worker keeps reading after every response even though each response
says "Connection: close"; the loop ends only when the client closes.

=============================================================================
"""

import socket
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states (for logging and debugging)."""
    NEW = "new"                # Just accepted
    READING = "reading"        # Blocked in recv()
    PROCESSING = "processing"  # Routing / handler running (may be sleeping)
    WRITING = "writing"        # Sending the response
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    One accepted client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        buffer_size: Bytes per recv(), i.e. the maximum request size.
        id: Short identifier used in log lines.
        state: Current ConnectionState.
        requests_handled: Reads that produced a request.
    """

    socket: socket.socket
    address: tuple

    buffer_size: int = 1024

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    requests_handled: int = 0

    def __post_init__(self):
        # Reads block without a timeout: a silent client holds its worker
        # until it closes the connection.
        self.socket.setblocking(True)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    def read_request(self) -> Optional[bytes]:
        """
        Read one request: a single recv() of up to buffer_size bytes.

        Returns:
            The bytes read, or None if the peer closed or the read failed.
        """
        self.state = ConnectionState.READING
        try:
            data = self.socket.recv(self.buffer_size)
        except OSError as e:
            logger.debug(f"[{self.id}] Read failed: {e}")
            return None

        if not data:
            return None

        self.requests_handled += 1
        self.state = ConnectionState.PROCESSING
        return data

    def send_response(self, data: bytes) -> bool:
        """
        Send response bytes with sendall().

        Returns:
            True if everything was sent, False if the connection is gone.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            # BrokenPipeError / ConnectionResetError are OSError subclasses
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """Close the socket. Safe to call more than once."""
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.close()
        except OSError:
            pass  # Already gone

        self.state = ConnectionState.CLOSED
        logger.debug(
            f"[{self.id}] Connection from {self.client_ip} closed after "
            f"{self.requests_handled} requests"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False
