"""
Tests for the webp-mcp command line
"""
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from webp_backend.server import PortUnavailable
from webp_cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def serve():
    """Fixture patching out the blocking server loop."""
    with patch("webp_cli.cli.serve") as serve:
        yield serve


class TestCli:
    """Test option handling."""

    def test_defaults_from_environment(self, runner, serve, monkeypatch):
        monkeypatch.setenv("PORT", "10500")
        monkeypatch.delenv("WEBP_MCP_HOST", raising=False)
        monkeypatch.delenv("WEBP_MCP_MAX_PORT_ATTEMPTS", raising=False)

        result = runner.invoke(cli, [])

        assert result.exit_code == 0, result.output
        _, host, port, attempts = serve.call_args.args
        assert (host, port, attempts) == ("0.0.0.0", 10500, 100)

    def test_options_override_environment(self, runner, serve, monkeypatch):
        monkeypatch.setenv("PORT", "10500")

        result = runner.invoke(cli, [
            "--host", "127.0.0.1", "--port", "9001", "--max-port-attempts", "3", "-w", "2",
        ])

        assert result.exit_code == 0, result.output
        app, host, port, attempts = serve.call_args.args
        assert (host, port, attempts) == ("127.0.0.1", 9001, 3)
        assert app.config["mcp_service"].config.workers == 2

    def test_port_exhaustion_is_an_error(self, runner, serve):
        serve.side_effect = PortUnavailable("Failed to start server after 3 attempts.")

        result = runner.invoke(cli, ["--max-port-attempts", "3"])

        assert result.exit_code == 1
        assert "Failed to start server after 3 attempts." in result.output

    def test_rejects_zero_attempts(self, runner, serve):
        result = runner.invoke(cli, ["--max-port-attempts", "0"])

        assert result.exit_code == 2
        serve.assert_not_called()
