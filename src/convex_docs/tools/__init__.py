"""MCP tool registration."""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..service import DocsService
from .core import register_core_tools
from .docs import register_docs_tools

logger = logging.getLogger(__name__)


def register_all_tools(mcp: FastMCP, config: Config, service: Optional[DocsService] = None) -> DocsService:
	"""Register all MCP tools around one shared DocsService."""
	service = service or DocsService(config)
	register_core_tools(mcp, config, service)
	register_docs_tools(mcp, config, service)
	logger.debug("Registered documentation tools")
	return service
