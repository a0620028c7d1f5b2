"""
Tests for glab-mcp CLI commands.

Tests cover:
- Starting the server with and without the start subcommand
- Option override precedence
- The --self-test flag
- The tools listing
"""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from glab_mcp.adapters import glab_adapter
from glab_mcp.cli.commands.mcp import _parse_env_overrides, app

from conftest import FakeRunner, failed, ok

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config loading at an empty directory."""
    monkeypatch.setenv("GLAB_MCP_CONFIG", str(tmp_path / "config.yaml"))
    for name in ("GLAB_MCP_EXECUTABLE", "GLAB_MCP_TRANSPORT", "GLAB_MCP_HOST",
                 "GLAB_MCP_PORT", "GLAB_MCP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class TestStart:
    """Test server startup."""

    @patch("glab_mcp.cli.commands.mcp.MCPServer")
    def test_no_subcommand_starts_stdio_server(self, mock_server_class):
        mock_server = MagicMock()
        mock_server_class.return_value = mock_server

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Transport: stdio" in result.output
        mock_server.start.assert_called_once()
        assert mock_server_class.call_args.kwargs["glab_executable"] == "glab"

    @patch("glab_mcp.cli.commands.mcp.MCPServer")
    def test_start_with_overrides(self, mock_server_class):
        mock_server_class.return_value = MagicMock()

        result = runner.invoke(
            app,
            [
                "--glab", "/opt/glab",
                "start",
                "--transport", "sse",
                "--host", "0.0.0.0",
                "--port", "9000",
                "--env", "GITLAB_HOST=git.example.com",
            ],
        )

        assert result.exit_code == 0
        assert "Listening on 0.0.0.0:9000" in result.output
        kwargs = mock_server_class.call_args.kwargs
        assert kwargs["transport"] == "sse"
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9000
        assert kwargs["glab_executable"] == "/opt/glab"
        assert kwargs["env"] == {"GITLAB_HOST": "git.example.com"}

    @patch("glab_mcp.cli.commands.mcp.MCPServer")
    def test_start_loads_config_file(self, mock_server_class, isolated_config):
        (isolated_config / "config.yaml").write_text(
            "env:\n  GITLAB_HOST: from-file\n  GLAB_PAGER: cat\n"
        )
        mock_server_class.return_value = MagicMock()

        result = runner.invoke(app, ["start", "--env", "GITLAB_HOST=from-cli"])

        assert result.exit_code == 0
        assert mock_server_class.call_args.kwargs["env"] == {
            "GITLAB_HOST": "from-cli",
            "GLAB_PAGER": "cat",
        }

    def test_invalid_transport(self):
        result = runner.invoke(app, ["start", "--transport", "carrier-pigeon"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_invalid_env_option(self):
        result = runner.invoke(app, ["start", "--env", "NOEQUALS"])

        assert result.exit_code == 1
        assert "Expected KEY=VALUE" in result.output

    @patch("glab_mcp.cli.commands.mcp.MCPServer")
    def test_server_runtime_error_exits_nonzero(self, mock_server_class):
        mock_server = MagicMock()
        mock_server.start.side_effect = RuntimeError("Port 8000 already in use")
        mock_server_class.return_value = mock_server

        result = runner.invoke(app, ["start"])

        assert result.exit_code == 1
        assert "Error starting server" in result.output

    def test_invalid_config_file(self, isolated_config):
        (isolated_config / "config.yaml").write_text("port: [1\n")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_config_path_is_directory(self, isolated_config):
        (isolated_config / "config.yaml").mkdir()

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestSelfTest:
    """Test the --self-test flag."""

    @patch("glab_mcp.cli.commands.mcp.MCPServer")
    def test_prints_version_and_exits(self, mock_server_class, monkeypatch):
        fake = FakeRunner([ok("glab version 1.50.0\n")])
        monkeypatch.setattr(glab_adapter, "run_process", fake)

        result = runner.invoke(app, ["--self-test"])

        assert result.exit_code == 0
        assert "glab: glab version 1.50.0" in result.output
        assert fake.calls[0]["args"] == ["--version"]
        mock_server_class.assert_not_called()

    def test_glab_failure_exits_nonzero(self, monkeypatch):
        fake = FakeRunner([failed(1, stderr="not logged in")])
        monkeypatch.setattr(glab_adapter, "run_process", fake)

        result = runner.invoke(app, ["--self-test"])

        assert result.exit_code == 1
        assert "not logged in" in result.output

    def test_uses_configured_executable(self, monkeypatch):
        fake = FakeRunner([ok("v\n")])
        monkeypatch.setattr(glab_adapter, "run_process", fake)

        result = runner.invoke(app, ["--glab", "glab-nightly", "--self-test"])

        assert result.exit_code == 0
        assert fake.calls[0]["program"] == "glab-nightly"


def test_tools_command_lists_tools():
    result = runner.invoke(app, ["tools"])

    assert result.exit_code == 0
    assert "gitlab_issues_list" in result.output
    assert "gitlab_api" in result.output


def test_parse_env_overrides():
    assert _parse_env_overrides(["A=1", "B=x=y", "C="]) == {"A": "1", "B": "x=y", "C": ""}
    with pytest.raises(ValueError):
        _parse_env_overrides(["=1"])
