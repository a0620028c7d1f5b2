"""
glab adapter layer for MCP tool integration.

Provides a consistent interface for MCP tools to invoke the glab CLI
without each tool handling processes, exit codes or JSON parsing.
"""

from .process import InvocationResult, build_child_env, run_process
from .glab_adapter import (
    PAGE_SIZE,
    GlabAdapter,
    GlabCommandError,
    GlabError,
    GlabOutputError,
)

__all__ = [
    "PAGE_SIZE",
    "GlabAdapter",
    "GlabCommandError",
    "GlabError",
    "GlabOutputError",
    "InvocationResult",
    "build_child_env",
    "run_process",
]
