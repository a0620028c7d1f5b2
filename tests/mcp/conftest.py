"""Shared fixtures for glab MCP tests."""

import json

import pytest

from glab_mcp.adapters import GlabAdapter, InvocationResult


class FakeRunner:
    """Stands in for run_process, replaying canned results in order."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    async def __call__(self, program, args, env=None):
        self.calls.append({"program": program, "args": list(args), "env": env})
        if not self.results:
            raise AssertionError(f"Unexpected glab call: {args}")
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


def ok(stdout="", stderr=""):
    return InvocationResult(exit_code=0, stdout=stdout, stderr=stderr)


def ok_json(data):
    return ok(json.dumps(data))


def failed(exit_code=1, stderr="", stdout=""):
    return InvocationResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


@pytest.fixture
def make_adapter():
    """Build a GlabAdapter backed by a FakeRunner; returns (adapter, runner)."""

    def _make(*results, env=None):
        runner = FakeRunner(results)
        return GlabAdapter(executable="glab", env=env, runner=runner), runner

    return _make
