"""
MCP tools for GitLab merge requests.

Listing goes through ``glab mr list``. Creation goes through the REST API
via ``glab api`` so it does not depend on a local git checkout.
"""

from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import Field

from glab_mcp.adapters import PAGE_SIZE

from .identifiers import project_id_or_encoded_path
from .registry import GlabRequest, ToolSpec, field_flags, interpret_json

DRAFT_PREFIX = "Draft: "


def build_mrs_list_request(
    project: Annotated[str, Field(description="Project path or numeric ID")],
    state: Literal["opened", "merged", "closed", "all"] = "opened",
    labels: Annotated[
        Optional[str], Field(description="Comma-separated label names")
    ] = None,
    draft: Optional[bool] = None,
) -> GlabRequest:
    args = [
        "mr", "list",
        "-R", project,
        "--output", "json",
        "-P", str(PAGE_SIZE),
    ]
    if state != "opened":
        args.extend(["--state", state])
    if labels:
        args.extend(["--label", labels])
    if draft is True:
        args.append("--draft")
    return GlabRequest(args)


def build_merge_request_fields(
    source_branch: str,
    target_branch: str,
    title: str,
    description: str = "",
    draft: bool = False,
    labels: Optional[str] = None,
    assignees: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the REST form fields for a new merge request.

    Args:
        source_branch: Branch to merge from
        target_branch: Branch to merge into
        title: Merge request title
        description: Body text (omitted when empty)
        draft: Mark as draft by prefixing the title
        labels: Comma-separated label names
        assignees: Comma-separated assignee user IDs

    Returns:
        Ordered mapping of API field name to value
    """
    fields: Dict[str, Any] = {
        "source_branch": source_branch,
        "target_branch": target_branch,
        "title": title,
    }
    if description:
        fields["description"] = description
    if draft:
        fields["title"] = f"{DRAFT_PREFIX}{title}"
    if labels:
        fields["labels"] = labels
    if assignees:
        fields["assignee_ids"] = [a.strip() for a in assignees.split(",")]
    return fields


def build_mr_create_request(
    project: Annotated[str, Field(description="Project path or numeric ID")],
    sourceBranch: str,
    targetBranch: str,
    title: str,
    description: str = "",
    draft: bool = False,
    labels: Annotated[
        Optional[str], Field(description="Comma-separated label names")
    ] = None,
    assignees: Annotated[
        Optional[str], Field(description="Comma-separated assignee user IDs")
    ] = None,
) -> GlabRequest:
    path = f"projects/{project_id_or_encoded_path(project)}/merge_requests"
    fields = build_merge_request_fields(
        source_branch=sourceBranch,
        target_branch=targetBranch,
        title=title,
        description=description,
        draft=draft,
        labels=labels,
        assignees=assignees,
    )
    return GlabRequest(["api", "--method", "POST", path, *field_flags(fields)])


MRS_LIST_TOOL = ToolSpec(
    name="gitlab_mrs_list",
    title="List merge requests",
    description="List MRs for a project using glab mr list",
    build=build_mrs_list_request,
    interpret=interpret_json,
)

MR_CREATE_TOOL = ToolSpec(
    name="gitlab_mr_create",
    title="Create a merge request",
    description="Create an MR using GitLab REST API via glab api",
    build=build_mr_create_request,
    interpret=interpret_json,
    read_only=False,
)
