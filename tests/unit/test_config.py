"""
Unit tests for server configuration and the CLI.
"""

import socket

import pytest

from staticserver import __main__ as cli
from staticserver.config import ServerConfig


ENV_VARS = (
    "HTTP_HOST", "HTTP_PORT", "HTTP_BACKLOG", "HTTP_DOCUMENT_ROOT",
    "HTTP_BUFFER_SIZE", "HTTP_TIMEOUT", "HTTP_LOG_LEVEL",
)


class TestServerConfig:
    """Tests for ServerConfig defaults and validation."""

    def test_defaults(self):
        """Test that defaults give the classic fixed server."""
        config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.document_root == "./www"
        assert config.buffer_size == 1024
        assert config.backlog == socket.SOMAXCONN
        assert config.timeout is None

    def test_defaults_are_valid(self):
        """Test that the default config passes validation."""
        ServerConfig().validate()

    def test_ephemeral_port_allowed(self):
        """Test that port 0 is accepted."""
        ServerConfig(port=0).validate()

    @pytest.mark.parametrize("kwargs", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"buffer_size": 0},
        {"timeout": 0},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, kwargs):
        """Test that bad values fail fast."""
        with pytest.raises(ValueError):
            ServerConfig(**kwargs).validate()

    def test_missing_document_root_is_not_an_error(self, tmp_path):
        """Test that a nonexistent root still validates."""
        ServerConfig(document_root=str(tmp_path / "missing")).validate()

    def test_from_env(self, monkeypatch):
        """Test reading configuration from the environment."""
        monkeypatch.setenv("HTTP_HOST", "127.0.0.1")
        monkeypatch.setenv("HTTP_PORT", "9090")
        monkeypatch.setenv("HTTP_DOCUMENT_ROOT", "/srv/www")
        monkeypatch.setenv("HTTP_BUFFER_SIZE", "2048")
        monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 9090
        assert config.document_root == "/srv/www"
        assert config.buffer_size == 2048
        assert config.timeout == 2.5
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        """Test that an empty environment gives the defaults."""
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()


class FakeServer:
    """Stands in for StaticFileServer so main() doesn't block."""

    instances = []

    def __init__(self, config):
        config.validate()
        self.config = config
        self.ran = False
        FakeServer.instances.append(self)

    def run(self):
        self.ran = True


class TestCLI:
    """Tests for the command-line entry point."""

    @pytest.fixture(autouse=True)
    def fake_server(self, monkeypatch):
        FakeServer.instances = []
        monkeypatch.setattr(cli, "StaticFileServer", FakeServer)
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Test that no flags means the default config."""
        assert cli.main([]) == 0

        server = FakeServer.instances[0]
        assert server.ran
        assert server.config == ServerConfig()

    def test_flags_override(self, monkeypatch):
        """Test that flags win over the environment."""
        monkeypatch.setenv("HTTP_PORT", "9000")

        cli.main(["--port", "3000", "--root", "public", "--host", "127.0.0.1", "-l", "DEBUG"])

        config = FakeServer.instances[0].config
        assert config.port == 3000
        assert config.document_root == "public"
        assert config.host == "127.0.0.1"
        assert config.log_level == "DEBUG"

    def test_env_used_without_flags(self, monkeypatch):
        """Test that the environment applies when no flag is given."""
        monkeypatch.setenv("HTTP_PORT", "9000")

        cli.main([])

        assert FakeServer.instances[0].config.port == 9000

    def test_invalid_config_exits_nonzero(self, capsys):
        """Test that a bad port is reported, not raised."""
        assert cli.main(["--port", "70000"]) == 1
        assert "Invalid port" in capsys.readouterr().err

    @pytest.mark.parametrize("name", ["HTTP_PORT", "HTTP_BACKLOG", "HTTP_BUFFER_SIZE", "HTTP_TIMEOUT"])
    def test_malformed_env_exits_nonzero(self, monkeypatch, capsys, name):
        """Test that an unparseable number in the environment is reported, not raised."""
        monkeypatch.setenv(name, "abc")

        assert cli.main([]) == 1
        assert capsys.readouterr().err.startswith("Error: ")
        assert FakeServer.instances == []

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])

        assert exc_info.value.code == 0
        assert "staticserver" in capsys.readouterr().out
