"""convex-docs: MCP server exposing the Convex documentation to agents."""

__version__ = "1.0.0"
