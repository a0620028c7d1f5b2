"""Tests for the child process runner."""

import os
import sys

import pytest

from glab_mcp.adapters.process import InvocationResult, build_child_env, run_process


class TestBuildChildEnv:
    """Environment overlay merging."""

    def test_no_overlay_copies_environment(self, monkeypatch):
        monkeypatch.setenv("GLAB_MCP_TEST_VAR", "base")

        env = build_child_env()

        assert env["GLAB_MCP_TEST_VAR"] == "base"
        assert env is not os.environ

    def test_overlay_wins_on_conflict(self, monkeypatch):
        monkeypatch.setenv("GLAB_MCP_TEST_VAR", "base")

        env = build_child_env({"GLAB_MCP_TEST_VAR": "overlay", "OTHER": "x"})

        assert env["GLAB_MCP_TEST_VAR"] == "overlay"
        assert env["OTHER"] == "x"

    def test_current_environment_not_mutated(self, monkeypatch):
        monkeypatch.delenv("GLAB_MCP_ONLY_IN_CHILD", raising=False)

        build_child_env({"GLAB_MCP_ONLY_IN_CHILD": "1"})

        assert "GLAB_MCP_ONLY_IN_CHILD" not in os.environ


class TestRunProcess:
    """Real child processes of the current interpreter."""

    @pytest.mark.asyncio
    async def test_captures_output_and_exit_code(self):
        script = (
            "import sys; sys.stdout.write('out text'); "
            "sys.stderr.write('err text'); sys.exit(3)"
        )

        result = await run_process(sys.executable, ["-c", script])

        assert result == InvocationResult(exit_code=3, stdout="out text", stderr="err text")

    @pytest.mark.asyncio
    async def test_zero_exit(self):
        result = await run_process(sys.executable, ["-c", "print('hello')"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "hello"
        assert result.stderr == ""

    @pytest.mark.asyncio
    async def test_env_overlay_reaches_child(self):
        script = "import os; print(os.environ['GLAB_MCP_CHILD_VAR'])"

        result = await run_process(
            sys.executable, ["-c", script], env={"GLAB_MCP_CHILD_VAR": "from-overlay"}
        )

        assert result.stdout.strip() == "from-overlay"

    @pytest.mark.asyncio
    async def test_stdin_is_empty(self):
        script = "import sys; print(repr(sys.stdin.read()))"

        result = await run_process(sys.executable, ["-c", script])

        assert result.stdout.strip() == "''"

    @pytest.mark.asyncio
    async def test_missing_executable_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_process("glab-mcp-definitely-not-installed", ["--version"])
