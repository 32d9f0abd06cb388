"""
=============================================================================
CORE NETWORKING
=============================================================================

    socket_server.py   Listening socket + accept loop (SocketServer)
    connection.py      One accepted client socket (Connection)
    console.py         Lock-serialized stdout shared by all workers

Concurrency model: one thread per accepted connection. The accept loop
only accepts; each worker thread reads, routes, and writes for its own
connection until the client goes away.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState
from .console import echo, echo_request

__all__ = [
    "SocketServer",     # Accept loop
    "Connection",       # Client socket wrapper
    "ConnectionState",  # Connection lifecycle states
    "echo",             # Serialized print
    "echo_request",     # Serialized "Received Request:" print
]
