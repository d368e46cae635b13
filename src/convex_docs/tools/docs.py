"""Documentation tools - list topics, fetch a page, search."""

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..errors import DocsError
from ..service import DocsService

logger = logging.getLogger(__name__)


def error_response(error: Exception, context: str) -> str:
	"""JSON error payload; failures never escape a tool call."""
	if isinstance(error, DocsError):
		logger.warning(f"{context}: {error}")
		return json.dumps({"error": error.code, "message": str(error)})
	logger.exception(f"{context}: unexpected error")
	return json.dumps({"error": "internal_error", "message": str(error) or type(error).__name__})


def format_page(page: dict) -> str:
	return f"# {page['title']}\n\nSource: {page['url']}\n\n---\n\n{page['content']}"


def register_docs_tools(mcp: FastMCP, config: Config, service: Optional[DocsService] = None) -> None:
	"""Register the documentation query tools."""
	service = service or DocsService(config)

	@mcp.tool()
	async def list_convex_topics(section: Optional[str] = None) -> str:
		"""
		List all available Convex documentation sections and pages.
		Optionally filter by a specific section like 'functions', 'database', 'auth', etc.

		Args:
			section: Optional section to filter by (e.g., 'functions', 'database', 'auth')
		"""
		try:
			return json.dumps(await service.list_topics(section), indent=2)
		except Exception as e:
			return error_response(e, f"list_convex_topics(section={section!r})")

	@mcp.tool()
	async def get_convex_doc_page(path: str) -> str:
		"""
		Fetch and return a specific Convex documentation page as markdown.
		Provide either a path (e.g., 'functions/query-functions') or a full URL.

		Args:
			path: The documentation page path (e.g., 'functions/query-functions') or full URL
		"""
		try:
			return format_page(await service.get_page(path))
		except Exception as e:
			return error_response(e, f"get_convex_doc_page(path={path!r})")

	@mcp.tool()
	async def search_convex_docs(query: str) -> str:
		"""
		Search Convex documentation by keyword or topic.
		Returns matching pages with titles, URLs, and descriptions.

		Args:
			query: Search query to find relevant Convex documentation
		"""
		try:
			return json.dumps(await service.search(query), indent=2)
		except Exception as e:
			return error_response(e, f"search_convex_docs(query={query!r})")
