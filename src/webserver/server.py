"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together: the accept loop, one worker thread per
connection, the router with its three handlers, and the response writer.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer (accept thread)                                       │
    │        │ accept()                                                    │
    │        ▼                                                             │
    │   _handle_connection(conn) ── threading.Thread(daemon=True) ──┐      │
    │                                                               │      │
    │   ┌───────────────────────── worker thread ──────────────────▼───┐  │
    │   │  while True:                                                  │  │
    │   │      data = conn.read_request()     one recv()               │  │
    │   │      if data is None: break         peer closed / error      │  │
    │   │      echo_request(data)             under the console lock   │  │
    │   │      response = router.dispatch(data)                         │  │
    │   │      conn.send_response(response.to_bytes())                  │  │
    │   │  conn.close()                                                 │  │
    │   └───────────────────────────────────────────────────────────────┘  │
    │                                                                      │
    │   Router:  GET /static → StaticFileHandler                          │
    │            GET /calc   → handle_calc                                 │
    │            GET /sleep  → SleepHandler                                │
    │            otherwise   → not-found page                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Workers share nothing but the console lock, so a worker blocked in
/sleep/N never delays any other connection.

=============================================================================
ADMISSION CONTROL (opt-in)
=============================================================================

By default there is no limit on concurrent workers. With
ServerConfig.max_connections = N, a BoundedSemaphore of N slots is taken
before a worker starts and given back when it finishes. While all slots
are taken the accept thread waits, and new clients queue in the kernel
backlog.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection, echo_request
from .http import Router, Response, HTTPStatus
from .handlers import StaticFileHandler, SleepHandler, handle_calc


logger = logging.getLogger(__name__)

# Seconds between running-flag checks while waiting for a worker slot
SLOT_POLL_INTERVAL = 1.0


class WebServer:
    """
    Threaded HTTP/1.1 server for /static, /calc and /sleep.

    Usage:
        server = WebServer(ServerConfig(port=8080))
        server.run()            # Blocks until SIGINT/SIGTERM or shutdown()
    """

    def __init__(self, config: Optional[ServerConfig] = None, router: Optional[Router] = None):
        """
        Initialize the server.

        Args:
            config: Server configuration. Defaults to ServerConfig().
            router: Router to use instead of the default three routes.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._router = router or self._build_router()

        self._slots: Optional[threading.BoundedSemaphore] = None
        if self.config.max_connections is not None:
            self._slots = threading.BoundedSemaphore(self.config.max_connections)

        self._running = False

    def _build_router(self) -> Router:
        """The fixed routing table, in match order."""
        router = Router()
        static = StaticFileHandler(
            root_dir=self.config.static_dir,
            confine=self.config.confine_static,
            standard_content_types=self.config.standard_content_types,
        )
        router.add_route("/static", static.handle, name="static")
        router.add_route("/calc", handle_calc, name="calc")
        router.add_route("/sleep", SleepHandler().handle, name="sleep")
        return router

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port); meaningful once the server is listening."""
        return self._socket_server.address

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Raises:
            OSError: If the listening socket cannot be set up.
        """
        self._setup_logging()
        self._running = True
        try:
            self._socket_server.start(self._handle_connection)
        finally:
            self._running = False
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. Running workers are not interrupted."""
        self._running = False
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is listening. Returns False on timeout."""
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = self.config.log_level_value

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("webserver").setLevel(level)

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _acquire_slot(self) -> bool:
        if self._slots is None:
            return True
        while self._running:
            if self._slots.acquire(timeout=SLOT_POLL_INTERVAL):
                return True
        return False

    def _handle_connection(self, conn: Connection):
        """
        Start a worker for a freshly accepted connection (accept thread).

        Fire-and-forget: the worker is a daemon thread that nobody joins.
        If the thread cannot be started (thread limit reached), only this
        connection is dropped and the accept loop goes on.
        """
        if not self._acquire_slot():
            conn.close()
            return

        worker = threading.Thread(
            target=self._worker,
            args=(conn,),
            name=f"worker-{conn.id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as e:
            logger.error(f"[{conn.id}] Cannot start worker: {e}")
            conn.close()
            self._release_slot()

    def _release_slot(self):
        if self._slots is not None:
            self._slots.release()

    def _worker(self, conn: Connection):
        try:
            self._process_connection(conn)
        except Exception as e:
            logger.exception(f"[{conn.id}] Worker error: {e}")
        finally:
            conn.close()
            self._release_slot()

    def _process_connection(self, conn: Connection):
        """
        Serve requests on one connection until the client closes it.

        Every response carries "Connection: close", yet the loop goes on
        reading; it is the client that ends the conversation.
        """
        with conn:
            while True:
                data = conn.read_request()
                if data is None:
                    break

                if self.config.echo_requests:
                    echo_request(data)

                response = self._router.dispatch(data)
                self._log_response(conn, response)

                if not conn.send_response(response.to_bytes(self.config.real_status_codes)):
                    break

    def _log_response(self, conn: Connection, response: Response):
        if response.status == HTTPStatus.NOT_FOUND:
            logger.debug(f"[{conn.id}] Not found ({response.length} bytes)")
        else:
            logger.debug(f"[{conn.id}] {response.content_type} ({response.length} bytes)")

