"""
pytest configuration and fixtures.
"""

import socket
import threading
from pathlib import Path
from typing import Callable, Generator, Optional, Tuple
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from webserver import WebServer, ServerConfig


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"
HTML_BYTES = b"<html><body>hello</body></html>"


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A static tree with a PNG, an HTML page, a text file and a subdirectory."""
    root = tmp_path / "static"
    (root / "images").mkdir(parents=True)
    (root / "images" / "rex.png").write_bytes(PNG_BYTES)
    (root / "index.html").write_bytes(HTML_BYTES)
    (root / "notes.txt").write_bytes(b"plain notes\n")
    (root / "foo").write_bytes(b"foo file")
    (tmp_path / "secret.txt").write_bytes(b"outside the static directory")
    return root


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def read_response(sock: socket.socket) -> Tuple[bytes, dict, bytes]:
    """
    Read exactly one response from a socket.

    Returns:
        (status line, headers, body)
    """
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(4096)
        if not chunk:
            raise ConnectionError("Connection closed before headers")
        data += chunk

    head, _, body = data.partition(b"\r\n\r\n")
    status_line, *header_lines = head.split(b"\r\n")
    headers = {}
    for line in header_lines:
        name, _, value = line.decode("latin-1").partition(":")
        headers[name.strip()] = value.strip()

    length = int(headers["Content-Length"])
    while len(body) < length:
        chunk = sock.recv(4096)
        if not chunk:
            raise ConnectionError("Connection closed before body")
        body += chunk

    return status_line, headers, body


def send_request(port: int, path: str, method: str = "GET", timeout: float = 10.0) -> Tuple[bytes, dict, bytes]:
    """Open a connection, send one request, read one response, close."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as sock:
        sock.sendall(f"{method} {path} HTTP/1.1\r\nHost: localhost\r\n\r\n".encode())
        return read_response(sock)


@pytest.fixture
def http_get():
    """One-shot request helper: http_get(port, path) → (status, headers, body)."""
    return send_request


@pytest.fixture
def recv_response():
    """Read one response from an already connected socket."""
    return read_response


class LiveServer:
    """Runs a WebServer in a background thread."""

    def __init__(self, server: WebServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()
        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def server_factory(static_dir: Path) -> Generator[Callable[..., LiveServer], None, None]:
    """
    Start servers with custom settings: server_factory(real_status_codes=True).

    Every server started through the factory is stopped after the test.
    """
    started = []

    def factory(**overrides) -> LiveServer:
        options = dict(
            host="127.0.0.1",
            port=0,
            static_dir=str(static_dir),
            echo_requests=False,
            log_level="WARNING",
        )
        options.update(overrides)

        live = LiveServer(WebServer(ServerConfig(**options)))
        live.start()
        started.append(live)
        return live

    yield factory

    for live in started:
        live.stop()


@pytest.fixture
def live_server(server_factory) -> LiveServer:
    """A running server on an OS-assigned loopback port."""
    return server_factory()
