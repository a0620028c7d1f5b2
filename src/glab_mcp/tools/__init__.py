"""
MCP tool table for GitLab operations.

Domain-grouped tool records that translate MCP requests into glab
invocations. Each record declares its input shape through its argument
builder; dispatch and serialization are shared.
"""

from .registry import (
    GlabRequest,
    ToolSpec,
    dispatch,
    make_tool_handler,
    tool_table,
)
from .system_tools import GLAB_VERSION_TOOL
from .issue_tools import ISSUES_LIST_TOOL
from .merge_request_tools import MR_CREATE_TOOL, MRS_LIST_TOOL
from .pipeline_tools import PIPELINES_LIST_TOOL
from .api_tools import GITLAB_API_TOOL

TOOL_SPECS = [
    GLAB_VERSION_TOOL,
    ISSUES_LIST_TOOL,
    MRS_LIST_TOOL,
    MR_CREATE_TOOL,
    PIPELINES_LIST_TOOL,
    GITLAB_API_TOOL,
]

__all__ = [
    "GITLAB_API_TOOL",
    "GLAB_VERSION_TOOL",
    "ISSUES_LIST_TOOL",
    "MR_CREATE_TOOL",
    "MRS_LIST_TOOL",
    "PIPELINES_LIST_TOOL",
    "TOOL_SPECS",
    "GlabRequest",
    "ToolSpec",
    "dispatch",
    "make_tool_handler",
    "tool_table",
]
