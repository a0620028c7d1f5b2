"""
System MCP tools.

Provides the glab presence/version check used by clients and by the
``--self-test`` startup flag.
"""

from .registry import GlabRequest, ToolSpec, interpret_text


def build_version_request() -> GlabRequest:
    return GlabRequest(["--version"])


GLAB_VERSION_TOOL = ToolSpec(
    name="glab_version",
    title="Get glab version",
    description="Returns 'glab --version' text to verify CLI presence",
    build=build_version_request,
    interpret=interpret_text,
)
