"""
Raw GitLab REST MCP tool.

Low-level escape hatch: any method and path below /api/v4, with optional
form fields and request headers, sent through ``glab api``.
"""

from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import Field

from .registry import GlabRequest, ToolSpec, field_flags, interpret_json


def build_api_request(
    path: Annotated[
        str,
        Field(
            description=(
                "Path below /api/v4, e.g. 'projects/:id/issues' where :id is "
                "numeric or URL-encoded path"
            )
        ),
    ],
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = "GET",
    fields: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> GlabRequest:
    args = ["api", "--method", method, path]
    for name, value in (headers or {}).items():
        args.extend(["-H", f"{name}: {value}"])
    args.extend(field_flags(fields))
    return GlabRequest(args)


GITLAB_API_TOOL = ToolSpec(
    name="gitlab_api",
    title="Raw GitLab API via glab",
    description=(
        "Call GitLab REST endpoints with glab api (method, path, fields, headers)"
    ),
    build=build_api_request,
    interpret=interpret_json,
    read_only=False,
)
