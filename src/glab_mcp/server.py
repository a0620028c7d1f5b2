"""
FastMCP server initialization and configuration.

Main server class that handles MCP protocol communication and tool
registration. Supports both stdio and SSE transports.
"""

import logging
import socket
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from glab_mcp.adapters import GlabAdapter
from glab_mcp.tools import TOOL_SPECS, ToolSpec, make_tool_handler, tool_table

logger = logging.getLogger(__name__)

SERVER_NAME = "gitlab-glab"

SERVER_INSTRUCTIONS = (
    "GitLab tools backed by the glab CLI. Projects are given as a path "
    "('group/project') or numeric ID. Results are JSON text."
)


@dataclass
class MCPServer:
    """
    Main MCP server instance exposing GitLab tools.

    Attributes:
        host: Server bind address (default: "127.0.0.1", SSE only)
        port: Server port (default: 8000, SSE only)
        transport: Transport mode ("stdio" or "sse")
        glab_executable: glab CLI name or path
        env: Environment overlay for every glab invocation
        adapter: glab adapter shared by all tools (built if not given)
    """

    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse"] = "stdio"
    glab_executable: str = "glab"
    env: Dict[str, str] = field(default_factory=dict)
    adapter: Optional[GlabAdapter] = None
    _app: Optional[FastMCP] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.transport not in ("stdio", "sse"):
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                "Must be 'stdio' or 'sse'."
            )

        if self.adapter is None:
            self.adapter = GlabAdapter(executable=self.glab_executable, env=self.env)

        self._app = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)
        self._register_tools()

    @property
    def tools(self) -> Dict[str, ToolSpec]:
        return tool_table(TOOL_SPECS)

    def _check_port_available(self, host: str, port: int) -> bool:
        """
        Check if port is available for binding.

        Args:
            host: Host address to check
            port: Port number to check

        Returns:
            True if port is available, False otherwise
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return True
        except OSError:
            return False

    def _register_tools(self):
        """Register every tool of the table with the server."""
        for spec in self.tools.values():
            self.register_tool(spec)

    def register_tool(self, spec: ToolSpec):
        """
        Register an MCP tool with the server.

        Args:
            spec: Tool record to expose
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized")

        annotations = ToolAnnotations(
            title=spec.title,
            readOnlyHint=spec.read_only,
            openWorldHint=True,
        )
        self._app.tool(
            name=spec.name,
            description=spec.description,
            annotations=annotations,
        )(make_tool_handler(spec, self.adapter))
        logger.debug(f"Registered tool {spec.name}")

    def start(self):
        """
        Start the MCP server with configured transport.

        Raises:
            RuntimeError: If port unavailable (SSE) or FastMCP fails to start
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized. This should not happen.")

        if self.transport == "stdio":
            # stdout carries JSON-RPC; diagnostics go to stderr
            try:
                self._app.run()
            except Exception as e:
                raise RuntimeError(f"Failed to start MCP server with stdio transport: {e}") from e

        elif self.transport == "sse":
            if not self._check_port_available(self.host, self.port):
                raise RuntimeError(
                    f"Port {self.port} already in use. "
                    f"Choose a different port or stop the conflicting service."
                )

            try:
                self._app.run(transport="sse", host=self.host, port=self.port)
            except Exception as e:
                raise RuntimeError(
                    f"Failed to start MCP server on {self.host}:{self.port}: {e}"
                ) from e
