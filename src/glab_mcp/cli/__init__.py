"""glab-mcp command-line entry point."""

from .commands.mcp import app


def main():
    app()


__all__ = ["app", "main"]
