"""MCP tools for GitLab CI pipelines."""

from typing import Annotated, Optional

from pydantic import Field

from .identifiers import encode_segment, project_id_or_encoded_path
from .registry import GlabRequest, ToolSpec, interpret_json


def build_pipelines_list_request(
    project: Annotated[str, Field(description="Project path or numeric ID")],
    page: Annotated[int, Field(ge=1)] = 1,
    perPage: Annotated[int, Field(ge=1, le=100)] = 50,
    status: Annotated[
        Optional[str],
        Field(description="Pipeline status filter, passed through to GitLab"),
    ] = None,
) -> GlabRequest:
    path = (
        f"projects/{project_id_or_encoded_path(project)}/pipelines"
        f"?per_page={perPage}&page={page}"
    )
    if status:
        path += f"&status={encode_segment(status)}"
    return GlabRequest(["api", "--method", "GET", path])


PIPELINES_LIST_TOOL = ToolSpec(
    name="gitlab_pipelines_list",
    title="List pipelines",
    description="List pipelines for a project using GitLab REST via `glab api`",
    build=build_pipelines_list_request,
    interpret=interpret_json,
)
