"""Tests for the MCP tool layer."""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from convex_docs.config import Config
from convex_docs.errors import NotFound, SourceUnavailable
from convex_docs.index.sources import StaticSource
from convex_docs.service import DocsService
from convex_docs.tools import register_all_tools
from convex_docs.tools.core import register_core_tools
from convex_docs.tools.docs import error_response, format_page, register_docs_tools
from tests.helpers import BASE_URL, capture_tools


@pytest.fixture
def config(tmp_path: Path) -> Config:
	return Config(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture
def service(config) -> DocsService:
	return DocsService(config, source=StaticSource())


@pytest.fixture
def tools(config, service) -> dict:
	return capture_tools(config, register_docs_tools, service=service)


class TestErrorResponse:
	def test_domain_error_code(self):
		payload = json.loads(error_response(NotFound("Page not found: x"), "ctx"))
		assert payload == {"error": "not_found", "message": "Page not found: x"}

	def test_unexpected_error(self):
		payload = json.loads(error_response(RuntimeError(), "ctx"))
		assert payload == {"error": "internal_error", "message": "RuntimeError"}


def test_format_page():
	text = format_page({"title": "Indexes", "url": f"{BASE_URL}/database/indexes", "content": "Body"})
	assert text == f"# Indexes\n\nSource: {BASE_URL}/database/indexes\n\n---\n\nBody"


class TestDocsTools:
	def test_registers_three_tools(self, tools):
		assert set(tools) == {"list_convex_topics", "get_convex_doc_page", "search_convex_docs"}

	@pytest.mark.asyncio
	async def test_list_topics_json(self, tools):
		payload = json.loads(await tools["list_convex_topics"](section="auth"))
		assert payload["totalCount"] == 6
		assert payload["topics"][0]["url"] == f"{BASE_URL}/auth"

	@pytest.mark.asyncio
	async def test_list_topics_no_section(self, tools):
		payload = json.loads(await tools["list_convex_topics"]())
		assert len(payload["topics"]) == 13

	@pytest.mark.asyncio
	async def test_search_json(self, tools):
		payload = json.loads(await tools["search_convex_docs"](query="vector search"))
		assert payload["query"] == "vector search"
		assert payload["results"][0]["path"] == "search/vector-search"

	@pytest.mark.asyncio
	async def test_empty_query_is_error_payload(self, tools):
		payload = json.loads(await tools["search_convex_docs"](query=""))
		assert payload["error"] == "invalid_input"

	@pytest.mark.asyncio
	async def test_page_markdown(self, tools, service):
		service.fetcher._download = AsyncMock(
			return_value="<html><head><title>Indexes | Convex Developer Hub</title></head><body><main><p>Fast lookups</p></main></body></html>"
		)
		text = await tools["get_convex_doc_page"](path="database/indexes")
		assert text.startswith("# Indexes\n\nSource: https://docs.convex.dev/database/indexes")
		assert "Fast lookups" in text

	@pytest.mark.asyncio
	async def test_page_failures_are_error_payloads(self, tools, service):
		service.fetcher._download = AsyncMock(side_effect=SourceUnavailable("Failed to fetch: 503"))
		payload = json.loads(await tools["get_convex_doc_page"](path="database"))
		assert payload["error"] == "source_unavailable"

		service.fetcher._download = AsyncMock(side_effect=NotFound("Page not found"))
		payload = json.loads(await tools["get_convex_doc_page"](path="nope"))
		assert payload["error"] == "not_found"


class TestCoreTools:
	@pytest.mark.asyncio
	async def test_health_check(self, config, service):
		tools = capture_tools(config, register_core_tools, service=service)
		status = json.loads(await tools["health_check"]())
		assert status["server"] == "running"
		assert status["base_url"] == BASE_URL
		assert status["titles_file_exists"] is True


def test_register_all_tools_shares_service(config, service):
	captured = {}

	class MockMCP:
		def tool(self):
			def decorator(fn):
				captured[fn.__name__] = fn
				return fn
			return decorator

	assert register_all_tools(MockMCP(), config, service) is service
	assert len(captured) == 4
