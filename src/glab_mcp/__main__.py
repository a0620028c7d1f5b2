from glab_mcp.cli import main

main()
