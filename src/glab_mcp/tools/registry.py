"""
Tool table plumbing.

Each tool is a ToolSpec record: the argument builder's signature declares
the tool's input shape, and the result interpreter turns the built request
into the text payload. One dispatch routine drives every record.
"""

import inspect
import json
import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from fastmcp.exceptions import ToolError

from glab_mcp.adapters import GlabAdapter, GlabError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlabRequest:
    """Arguments for one glab call, as built from a tool's input."""

    args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ToolSpec:
    """
    Declarative description of one MCP tool.

    Attributes:
        name: Tool name exposed over MCP
        title: Short human-readable title
        description: Tool description shown to clients
        build: Argument builder; its signature is the tool's input schema
        interpret: Runs the request through the adapter, returns the payload
        read_only: Whether the tool leaves GitLab unchanged
    """

    name: str
    title: str
    description: str
    build: Callable[..., GlabRequest]
    interpret: Callable[[GlabAdapter, GlabRequest], Awaitable[str]]
    read_only: bool = True


def to_json_text(data: Any) -> str:
    """Serialize structured data the way every tool returns it."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_field(value: Any) -> str:
    """Render a form field value for ``glab api -F``."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def field_flags(fields: Optional[Mapping[str, Any]]) -> List[str]:
    """One ``-F key=value`` pair per field."""
    flags: List[str] = []
    for key, value in (fields or {}).items():
        flags.extend(["-F", f"{key}={format_field(value)}"])
    return flags


async def interpret_text(adapter: GlabAdapter, request: GlabRequest) -> str:
    out, _ = await adapter.run(request.args)
    return out.strip()


async def interpret_json(adapter: GlabAdapter, request: GlabRequest) -> str:
    return to_json_text(await adapter.run_json(request.args))


async def interpret_paginated(adapter: GlabAdapter, request: GlabRequest) -> str:
    return to_json_text(await adapter.paginate(request.args))


async def dispatch(spec: ToolSpec, adapter: GlabAdapter, *args, **kwargs) -> str:
    """
    Run one tool call end to end.

    Args:
        spec: Tool being invoked
        adapter: glab adapter to run the request with
        *args, **kwargs: Tool input, as accepted by spec.build

    Returns:
        Text payload for the caller

    Raises:
        GlabCommandError: If glab exits non-zero
        GlabOutputError: If glab output is not valid JSON
    """
    request = spec.build(*args, **kwargs)
    return await spec.interpret(adapter, request)


def make_tool_handler(spec: ToolSpec, adapter: GlabAdapter) -> Callable[..., Awaitable[str]]:
    """
    Create the async MCP handler for a tool record.

    The handler exposes the builder's parameters as its own, so FastMCP
    derives the input schema from the builder, and reports glab failures
    as ToolError.
    """

    @wraps(spec.build)
    async def handler(*args, **kwargs) -> str:
        try:
            return await dispatch(spec, adapter, *args, **kwargs)
        except GlabError as e:
            logger.error(f"Tool {spec.name} failed: {e}")
            raise ToolError(str(e)) from e

    handler.__signature__ = inspect.signature(spec.build).replace(return_annotation=str)
    handler.__annotations__ = {**spec.build.__annotations__, "return": str}
    return handler


def tool_table(specs: List[ToolSpec]) -> Dict[str, ToolSpec]:
    """Index tool records by name, rejecting duplicates."""
    table: Dict[str, ToolSpec] = {}
    for spec in specs:
        if spec.name in table:
            raise ValueError(f"Duplicate tool name: {spec.name}")
        table[spec.name] = spec
    return table
