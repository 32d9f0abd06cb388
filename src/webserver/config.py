"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Every tunable of the server lives in one dataclass.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m webserver -p 3000                               │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── WEBSERVER_PORT=3000 python -m webserver                   │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
COMPATIBILITY SWITCHES
=============================================================================

The defaults reproduce the server's historical wire behaviour. Three
switches opt into cleaner behaviour and one opts out of a safety check:

    standard_content_types   images/png, txt/html → image/png, text/html
    real_status_codes        not-found answered with 404 instead of 200
    max_connections          cap on concurrent workers (default: none)
    confine_static           False re-opens the ".." traversal hole

=============================================================================
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the web server.

    Development:
        ServerConfig(port=8080, log_level="DEBUG")

    Tests:
        ServerConfig(host="127.0.0.1", port=0, echo_requests=False)
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """Address to bind. "0.0.0.0" = every IPv4 interface."""

    port: int = 8080
    """Port to listen on. 0 lets the OS pick one (see WebServer.address)."""

    backlog: int = 10
    """Pending-connection queue passed to listen()."""

    buffer_size: int = 1024
    """
    Bytes per recv(). One recv() is one request: a request line longer
    than this is cut, and whatever follows is read as the next "request".
    """

    # ─────────────────────────────────────────────────────────────────────
    # STATIC FILES
    # ─────────────────────────────────────────────────────────────────────

    static_dir: str = "static/"
    """Base directory for /static, relative to the working directory."""

    confine_static: bool = True
    """Refuse /static paths that resolve outside static_dir."""

    # ─────────────────────────────────────────────────────────────────────
    # WIRE COMPATIBILITY
    # ─────────────────────────────────────────────────────────────────────

    standard_content_types: bool = False
    real_status_codes: bool = False

    # ─────────────────────────────────────────────────────────────────────
    # CONCURRENCY
    # ─────────────────────────────────────────────────────────────────────

    max_connections: Optional[int] = None
    """
    Maximum concurrently handled connections. None = one thread per
    accepted connection with no ceiling. When set, the accept loop waits
    for a free slot before accepting more.
    """

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT
    # ─────────────────────────────────────────────────────────────────────

    echo_requests: bool = True
    """Print every raw request to stdout."""

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        WEBSERVER_HOST             Bind address (default: 0.0.0.0)
        WEBSERVER_PORT             Port (default: 8080)
        WEBSERVER_STATIC_DIR       Static base directory (default: static/)
        WEBSERVER_MAX_CONNECTIONS  Worker cap (default: unlimited)
        WEBSERVER_LOG_LEVEL        Logging level (default: INFO)
        """
        max_connections = os.getenv("WEBSERVER_MAX_CONNECTIONS")
        return cls(
            host=os.getenv("WEBSERVER_HOST", "0.0.0.0"),
            port=int(os.getenv("WEBSERVER_PORT", "8080")),
            static_dir=os.getenv("WEBSERVER_STATIC_DIR", "static/"),
            max_connections=int(max_connections) if max_connections else None,
            log_level=os.getenv("WEBSERVER_LOG_LEVEL", "INFO"),
        )

    @property
    def log_level_value(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper())

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by WebServer at construction: bad values fail at startup,
        not on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 0:
            raise ValueError("backlog must be >= 0")

        if self.buffer_size < 16:
            raise ValueError("buffer_size must be >= 16")

        if self.max_connections is not None and self.max_connections < 1:
            raise ValueError("max_connections must be >= 1")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
