"""Core health check tool."""

import json

from mcp.server.fastmcp import FastMCP

from .. import __version__
from ..config import Config
from ..service import DocsService


def register_core_tools(mcp: FastMCP, config: Config, service: DocsService) -> None:
	"""Register core tools."""

	@mcp.tool()
	async def health_check() -> str:
		"""
		Check the health of the convex-docs server.
		Returns configuration and cache status.
		"""
		status = {
			"server": "running",
			"version": __version__,
			"base_url": config.base_url,
			"titles_file": str(config.titles_file),
			"titles_file_exists": config.titles_file.exists(),
			**service.status(),
		}
		return json.dumps(status, indent=2)
