"""Command modules for the glab-mcp CLI."""
