"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

Owns the listening socket and the accept loop. Every accepted client is
wrapped in a Connection and handed to a callback; what happens next
(threads, routing) is the caller's business.

SOCKET LIFECYCLE (Server Side):
────────────────────────────────

    1. socket()    AF_INET / SOCK_STREAM
    2. setsockopt  SO_REUSEADDR, so a restart does not hit TIME_WAIT
    3. bind()      (host, port)
    4. listen()    backlog from ServerConfig
    5. accept()    in a loop, until shutdown()
    6. close()

=============================================================================
FAILURE CLASSES
=============================================================================

    ┌───────────────────────┬────────────────────────────────────────────┐
    │ socket/bind/listen    │ FATAL: logged, socket closed, re-raised.   │
    │ fails                 │ The CLI turns this into exit status 1.     │
    ├───────────────────────┼────────────────────────────────────────────┤
    │ accept() fails        │ RECOVERABLE: logged, loop continues.       │
    ├───────────────────────┼────────────────────────────────────────────┤
    │ accept() times out    │ NORMAL: 1 s poll so shutdown() is noticed. │
    └───────────────────────┴────────────────────────────────────────────┘

=============================================================================
SIGNAL HANDLING
=============================================================================

SIGINT (Ctrl+C) and SIGTERM trigger shutdown(): the accept loop stops and
the listening socket is closed. Workers are daemon threads and are not
waited for. Python only allows installing signal handlers from the main
thread, so a server started from any other thread (tests) skips this.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection
from .console import echo


logger = logging.getLogger(__name__)

# Seconds accept() waits before re-checking the running flag
ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown()
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        The socket is created lazily in start().
        """
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._bound_address: Optional[Tuple[str, int]] = None

        self._ready_event = threading.Event()
        self._shutdown_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port).

        Once listening this is the real address, so port 0 in the config
        resolves to the port the OS picked.
        """
        if self._bound_address is not None:
            return self._bound_address
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create the listening socket with SO_REUSEADDR set."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Timeout on accept() only; accepted sockets are switched back to
        # blocking mode by Connection.
        sock.settimeout(ACCEPT_POLL_INTERVAL)
        return sock

    def _setup_signals(self):
        """Install SIGTERM/SIGINT handlers that call shutdown()."""
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen, and run the accept loop.

        This method BLOCKS until shutdown() is called.

        Args:
            connection_handler: Called on the accept thread for each new
                                Connection. It must not block on request
                                processing.

        Raises:
            OSError: If the socket cannot be created, bound, or put into
                     listening mode.
        """
        try:
            self._socket = self._create_socket()
        except OSError as e:
            logger.error(f"Socket creation failed: {e}")
            raise

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Bind failed on {self.config.host}:{self.config.port}: {e}")
            self._close_socket()
            raise

        try:
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Listen failed: {e}")
            self._close_socket()
            raise

        self._bound_address = self._socket.getsockname()[:2]
        self._setup_signals()

        host, port = self._bound_address
        logger.info(f"Listening on {host}:{port}")
        echo(f"Server listening on port {port}...")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """
        Accept connections until shutdown().

        ┌─────────────────────────────────────────────────────────────────┐
        │   while not shutdown:                                            │
        │       accept()            ← blocks up to 1 s                     │
        │       Connection(...)     ← wrap client socket                   │
        │       connection_handler  ← spawns the worker, returns at once   │
        └─────────────────────────────────────────────────────────────────┘
        """
        while not self._shutdown_event.is_set():
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._shutdown_event.is_set():
                    break
                logger.error(f"Accept failed: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
            )
            connection_handler(conn)

    def shutdown(self):
        """
        Stop the accept loop (within one poll interval).

        Safe to call from a signal handler, from another thread, more than
        once, or before start(). A server that was shut down before start()
        binds, then stops without accepting.
        """
        logger.info("Shutting down socket server...")
        self._shutdown_event.set()

    def _close_socket(self):
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass  # Already closed
            self._socket = None

    def _cleanup(self):
        self._restore_signals()
        self._close_socket()
        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready_event.wait(timeout)
