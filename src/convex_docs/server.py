"""convex-docs MCP server."""

from mcp.server.fastmcp import FastMCP

from .config import get_config
from .logging_config import setup_logging
from .tools import register_all_tools

mcp = FastMCP("convex-docs")
config = get_config()
setup_logging(config.log_level, config.log_dir)
service = register_all_tools(mcp, config)
