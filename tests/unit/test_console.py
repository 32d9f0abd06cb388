"""
Unit tests for serialized console output.
"""

import io
import threading

from webserver.core.console import echo, echo_request


class TestConsole:
    """Tests for echo() and echo_request()."""

    def test_echo_request_format(self):
        stream = io.StringIO()
        echo_request(b"GET /calc/add/1/2 HTTP/1.1\r\n\r\n", stream)

        assert stream.getvalue() == "Received Request:\nGET /calc/add/1/2 HTTP/1.1\r\n\r\n\n"

    def test_echo_request_invalid_utf8(self):
        stream = io.StringIO()
        echo_request(b"GET /\xff HTTP/1.1", stream)

        assert stream.getvalue().startswith("Received Request:\nGET /")

    def test_echo_defaults_to_stdout(self, capsys):
        echo("Server listening on port 8080...")

        assert capsys.readouterr().out == "Server listening on port 8080...\n"

    def test_concurrent_echo_does_not_interleave(self):
        """Test that each message lands as one contiguous block."""
        stream = io.StringIO()
        messages = [f"Received Request:\n{'x' * 2000}{i}" for i in range(20)]

        threads = [threading.Thread(target=echo, args=(m, stream)) for m in messages]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        output = stream.getvalue()
        for message in messages:
            assert message + "\n" in output
