"""Shared test fixtures and helpers for convex-docs tests."""

from typing import Callable
from unittest.mock import MagicMock

from convex_docs.models import Topic

BASE_URL = "https://docs.convex.dev"


def capture_tools(config: MagicMock, register_fn: Callable, **kwargs) -> dict:
	"""Register tools on a mock MCP and return the captured tool functions.

	Args:
		config: Config object to pass to the registration function
		register_fn: The registration function (e.g., register_docs_tools)

	Returns:
		Dict mapping tool name to the tool function
	"""
	captured = {}

	class MockMCP:
		def tool(self):
			def decorator(fn):
				captured[fn.__name__] = fn
				return fn
			return decorator

	register_fn(MockMCP(), config, **kwargs)
	return captured


class FakeClock:
	"""Manually advanced monotonic clock."""

	def __init__(self, start: float = 1000.0):
		self.now = start

	def __call__(self) -> float:
		return self.now

	def advance(self, seconds: float) -> None:
		self.now += seconds


def sitemap_xml(paths: list[str], base_url: str = BASE_URL) -> str:
	"""A minimal sitemap document listing the given paths."""
	entries = "".join(
		f"<url><loc>{base_url}/{path}</loc><changefreq>weekly</changefreq></url>"
		for path in paths
	)
	return (
		'<?xml version="1.0" encoding="UTF-8"?>'
		'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
		f"{entries}</urlset>"
	)


def make_tree() -> list[Topic]:
	"""A small two-level topic tree."""
	return [
		Topic(title="Database", path="database", description="Convex database docs", children=[
			Topic(title="Indexes", path="database/indexes", description="Speed up queries with indexes"),
			Topic(title="Pagination", path="database/pagination", description="Paginating query results"),
		]),
		Topic(title="Search", path="search", description="Full-text and vector search", children=[
			Topic(title="Vector Search", path="search/vector-search", description="Run vector search queries"),
		]),
		Topic(title="CLI", path="cli", description="Convex CLI reference"),
	]
