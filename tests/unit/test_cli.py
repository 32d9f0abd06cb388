"""
Unit tests for the command line entry point.
"""

import socket

import pytest

from webserver.__main__ import build_config, build_parser, main, parse_port
from webserver.config import ServerConfig


def parse(*argv: str) -> ServerConfig:
    """Parse argv over a default configuration."""
    args, _ = build_parser().parse_known_args(list(argv))
    return build_config(args, base=ServerConfig())


class TestParsePort:
    """Tests for parse_port()."""

    @pytest.mark.parametrize("value, expected", [
        ("3000", 3000),
        ("0", 0),
        ("abc", 8080),
        ("", 8080),
        ("30.5", 8080),
        (None, 8080),
    ])
    def test_parse_port(self, value, expected: int):
        assert parse_port(value, 8080) == expected


class TestBuildConfig:
    """Tests for layering arguments over a configuration."""

    def test_no_arguments(self):
        assert parse() == ServerConfig()

    def test_port(self):
        assert parse("-p", "3000").port == 3000
        assert parse("--port", "3000").port == 3000

    def test_port_without_value_uses_default(self):
        assert parse("-p").port == 8080

    def test_non_numeric_port_uses_default(self):
        assert parse("-p", "http").port == 8080

    def test_unknown_arguments_ignored(self):
        config = parse("--frobnicate", "-p", "3000", "extra")

        assert config.port == 3000

    def test_port_keeps_base_when_absent(self):
        args, _ = build_parser().parse_known_args([])
        config = build_config(args, base=ServerConfig(port=9999))

        assert config.port == 9999

    def test_options(self):
        config = parse(
            "-H", "127.0.0.1",
            "-s", "/srv/public",
            "--max-connections", "16",
            "-l", "DEBUG",
        )

        assert config.host == "127.0.0.1"
        assert config.static_dir == "/srv/public"
        assert config.max_connections == 16
        assert config.log_level == "DEBUG"

    def test_switches(self):
        config = parse(
            "--allow-traversal",
            "--standard-content-types",
            "--real-status-codes",
            "--quiet",
        )

        assert config.confine_static is False
        assert config.standard_content_types is True
        assert config.real_status_codes is True
        assert config.echo_requests is False

    def test_environment_is_the_default_base(self, monkeypatch):
        monkeypatch.setenv("WEBSERVER_PORT", "4321")
        args, _ = build_parser().parse_known_args([])

        assert build_config(args).port == 4321


class TestMain:
    """Tests for main() exit behaviour."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        monkeypatch.delenv("WEBSERVER_PORT", raising=False)
        monkeypatch.delenv("WEBSERVER_MAX_CONNECTIONS", raising=False)

    def test_bind_failure_exits_1(self, capsys):
        """Test that a port already in use ends the process with status 1."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as holder:
            holder.bind(("127.0.0.1", 0))
            holder.listen(1)
            port = holder.getsockname()[1]

            with pytest.raises(SystemExit) as exc_info:
                main(["-H", "127.0.0.1", "-p", str(port), "-q", "-l", "CRITICAL"])

        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    @pytest.mark.parametrize("argv", [
        ["-p", "70000"],
        ["--max-connections", "0"],
    ])
    def test_invalid_configuration_exits_1(self, capsys, argv):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)

        assert exc_info.value.code == 1
        assert "Error: " in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "webserver 1.0.0" in capsys.readouterr().out
