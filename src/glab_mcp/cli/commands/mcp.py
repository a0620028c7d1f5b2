"""glab MCP server commands."""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from glab_mcp.adapters import GlabAdapter, GlabError
from glab_mcp.config import MCPConfig
from glab_mcp.server import MCPServer
from glab_mcp.tools import GLAB_VERSION_TOOL, TOOL_SPECS, dispatch

app = typer.Typer(help="MCP server exposing GitLab tools backed by the glab CLI")

# stdout belongs to the stdio transport
console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_env_overrides(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated KEY=VALUE options."""
    env: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --env value '{pair}'. Expected KEY=VALUE.")
        env[key] = value
    return env


def run_self_test(config: MCPConfig) -> str:
    """Run the version check once and return glab's version text."""
    adapter = GlabAdapter(executable=config.glab_executable, env=config.env)
    return asyncio.run(dispatch(GLAB_VERSION_TOOL, adapter))


def _serve(config: MCPConfig) -> None:
    """Create the server from configuration and run it until it exits."""
    server = MCPServer(
        host=config.host,
        port=config.port,
        transport=config.transport,
        glab_executable=config.glab_executable,
        env=config.env,
    )

    console.print("[green]Starting MCP server...[/green]")
    console.print(f"Transport: {config.transport}")
    if config.transport == "sse":
        console.print(f"Listening on {config.host}:{config.port}")

    server.start()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    self_test: bool = typer.Option(
        False, "--self-test", help="Print the glab version to stderr and exit"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Config file (default: ~/.config/glab-mcp/config.yaml)"
    ),
    glab: Optional[str] = typer.Option(None, "--glab", help="glab executable (overrides config)"),
    log_level: Optional[str] = typer.Option(None, help="Log level (overrides config)"),
):
    """
    Serve GitLab tools over MCP.

    Without a subcommand the server starts with the loaded configuration.

    Examples:
        # Start with stdio transport
        glab-mcp

        # Check that glab is installed and on PATH
        glab-mcp --self-test
    """
    try:
        config = MCPConfig.load(config_file)
        if glab is not None:
            config.glab_executable = glab
        if log_level is not None:
            config = MCPConfig(**{**config.__dict__, "log_level": log_level})
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _configure_logging(config.log_level)
    ctx.obj = config

    if self_test:
        try:
            version = run_self_test(config)
        except GlabError as e:
            console.print(f"[red]Self-test failed:[/red] {escape(str(e))}", highlight=False)
            raise typer.Exit(1)
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
            raise typer.Exit(1)
        console.print(f"glab: {version}", markup=False, highlight=False)
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        _run_server(config)


def _run_server(config: MCPConfig) -> None:
    try:
        _serve(config)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except RuntimeError as e:
        console.print(f"[red]Error starting server:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def start(
    ctx: typer.Context,
    transport: str = typer.Option(None, help="Transport: stdio or sse (overrides config)"),
    host: str = typer.Option(None, help="Server host (SSE only, overrides config)"),
    port: int = typer.Option(None, help="Server port (SSE only, overrides config)"),
    env: List[str] = typer.Option(
        [], "--env", help="KEY=VALUE added to glab's environment (repeatable)"
    ),
):
    """
    Start the MCP server.

    Command-line options override the config file and environment.

    Examples:
        # Start with SSE transport
        glab-mcp start --transport sse --host 0.0.0.0 --port 8000

        # Target a self-managed GitLab instance
        glab-mcp start --env GITLAB_HOST=gitlab.example.com
    """
    config: MCPConfig = ctx.obj

    overrides = {}
    if transport is not None:
        overrides["transport"] = transport
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port

    try:
        if env:
            overrides["env"] = {**config.env, **_parse_env_overrides(env)}
        config = MCPConfig(**{**config.__dict__, **overrides})
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _run_server(config)


@app.command()
def tools():
    """
    List the tools this server exposes.

    Examples:
        glab-mcp tools
    """
    table = Table(title="glab MCP Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Read-only")

    for spec in TOOL_SPECS:
        table.add_row(spec.name, spec.title, "Yes" if spec.read_only else "No")

    console.print(table)
