"""
=============================================================================
WEBSERVER - Threaded HTTP/1.1 server on raw sockets
=============================================================================

A small concurrent web server with three endpoints:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   GET /static/<file>        File from ./static/                      │
    │                             images/png, txt/html or octet-stream     │
    │                                                                      │
    │   GET /calc/<op>/<a>/<b>    "Result: N\n"                             │
    │                             op = add | sub | mul | div               │
    │                                                                      │
    │   GET /sleep/<seconds>      Waits, then "Sleep time was N seconds"   │
    │                                                                      │
    │   anything else             200 + "<h1>404 Not Found</h1>"           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    webserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m webserver)
    ├── server.py            # WebServer: accept loop + worker threads
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # Listening socket, accept loop
    │   ├── connection.py    # One client socket, one recv() per request
    │   └── console.py       # Lock-serialized stdout
    ├── http/
    │   ├── request.py       # Request line → (method, path)
    │   ├── response.py      # Status line + 3 headers + body
    │   ├── router.py        # GET-only literal prefix routing
    │   ├── status_codes.py  # OK / NOT_FOUND tags
    │   └── content_types.py # Substring-based static file labels
    └── handlers/
        ├── static.py        # /static
        ├── calc.py          # /calc
        └── sleep.py         # /sleep

=============================================================================
QUICK START
=============================================================================

    $ python -m webserver -p 8080
    Server listening on port 8080...

    $ curl localhost:8080/calc/div/-7/2
    Result: -3

    from webserver import WebServer, ServerConfig
    WebServer(ServerConfig(port=8080)).run()

=============================================================================
"""

__version__ = "1.0.0"

from .server import WebServer
from .config import ServerConfig

__all__ = ["WebServer", "ServerConfig", "__version__"]
