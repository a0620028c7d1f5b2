"""
MCP (Model Context Protocol) server for GitLab, backed by the glab CLI.

Every tool builds a glab command line, runs it as a child process and
relays the parsed output. Authentication is whatever glab has stored.

Architecture:
- server.py: FastMCP server initialization and tool registration
- config.py: Configuration file and environment loading
- tools/: Domain-grouped tool records and the shared dispatch routine
- adapters/: Process runner and glab command wrappers
- cli/: typer command-line entry point
"""

__version__ = "0.1.0"

__all__ = ["MCPServer", "MCPConfig", "__version__"]

from .config import MCPConfig
from .server import MCPServer
