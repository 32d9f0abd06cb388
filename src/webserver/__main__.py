"""
=============================================================================
WEB SERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (0.0.0.0:8080, files from ./static/)
    python -m webserver

    # Custom port
    python -m webserver -p 3000

    # Loopback only, another static directory
    python -m webserver -H 127.0.0.1 -s ./public

    # Cap concurrent connections at 64
    python -m webserver --max-connections 64

The command line is deliberately forgiving: arguments it does not know
are ignored, and a -p without a usable number falls back to the default
port instead of aborting.

=============================================================================
EXIT STATUS
=============================================================================

    0   stopped by SIGINT / SIGTERM
    1   listening socket could not be created, bound, or put in listen mode
        (or the configuration is invalid)

=============================================================================
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .server import WebServer
from .config import ServerConfig, LOG_LEVELS


logger = logging.getLogger(__name__)


def parse_port(value: Optional[str], default: int) -> int:
    """
    Interpret the -p value; anything that is not an integer gives default.

    Examples:
        >>> parse_port("3000", 8080)
        3000
        >>> parse_port("abc", 8080)
        8080
        >>> parse_port(None, 8080)
        8080
    """
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="webserver",
        description="Threaded HTTP/1.1 server for /static, /calc and /sleep",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m webserver                  # Port 8080
  python -m webserver -p 3000          # Custom port
  curl localhost:8080/calc/add/1/2     # Result: 3
  curl localhost:8080/sleep/2          # Sleep time was 2 seconds
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--port", "-p",
        nargs="?",
        default=None,
        help="Port to listen on (default: 8080)",
    )

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Address to bind (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--max-connections",
        type=int,
        default=None,
        help="Cap on concurrently served connections (default: unlimited)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--static-dir", "-s",
        default=None,
        help="Directory served under /static (default: static/)",
    )

    parser.add_argument(
        "--allow-traversal",
        action="store_true",
        help="Serve /static paths that resolve outside the static directory",
    )

    parser.add_argument(
        "--standard-content-types",
        action="store_true",
        help="Send image/png and text/html instead of images/png and txt/html",
    )

    parser.add_argument(
        "--real-status-codes",
        action="store_true",
        help="Answer not-found requests with 404 instead of 200",
    )

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not print received requests",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"webserver {__version__}",
    )

    return parser


def build_config(args: argparse.Namespace, base: Optional[ServerConfig] = None) -> ServerConfig:
    """
    Layer parsed arguments over a base configuration.

    Args:
        args: Result of build_parser().parse_known_args()[0].
        base: Configuration to start from (default: ServerConfig.from_env()).
    """
    config = base or ServerConfig.from_env()

    config.port = parse_port(args.port, config.port)
    if args.host:
        config.host = args.host
    if args.static_dir:
        config.static_dir = args.static_dir
    if args.max_connections is not None:
        config.max_connections = args.max_connections
    if args.log_level:
        config.log_level = args.log_level

    if args.allow_traversal:
        config.confine_static = False
    if args.standard_content_types:
        config.standard_content_types = True
    if args.real_status_codes:
        config.real_status_codes = True
    if args.quiet:
        config.echo_requests = False

    return config


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)

    try:
        config = build_config(args)
        server = WebServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if unknown:
        logger.debug(f"Ignoring arguments: {unknown}")

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


# This allows running: python -m webserver
if __name__ == "__main__":
    main()
