"""MCP tools for GitLab issues."""

from typing import Annotated, Literal, Optional

from pydantic import Field

from glab_mcp.adapters import PAGE_SIZE

from .registry import GlabRequest, ToolSpec, interpret_paginated


def build_issues_list_request(
    project: Annotated[
        str, Field(description="Project path or numeric ID, e.g. 'gitlab-org/cli'")
    ],
    state: Literal["opened", "closed", "all"] = "opened",
    labels: Annotated[
        Optional[str], Field(description="Comma-separated label names")
    ] = None,
    assignee: Optional[str] = None,
) -> GlabRequest:
    """
    Build ``glab issue list`` arguments for one project.

    The page number is appended per page by the paginating interpreter.
    """
    args = [
        "issue", "list",
        "-R", project,
        "--output", "json",
        "-P", str(PAGE_SIZE),
    ]
    if state == "closed":
        args.append("--closed")
    elif state == "all":
        args.append("--all")
    if labels:
        args.extend(["--label", labels])
    if assignee:
        args.extend(["--assignee", assignee])
    return GlabRequest(args)


ISSUES_LIST_TOOL = ToolSpec(
    name="gitlab_issues_list",
    title="List GitLab issues",
    description="List issues for a project using glab issue list (all pages)",
    build=build_issues_list_request,
    interpret=interpret_paginated,
)
