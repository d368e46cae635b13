"""Tests for sitemap parsing and fetching."""

from unittest.mock import AsyncMock, patch

import pytest

from convex_docs.errors import ParseEmpty, SourceUnavailable
from convex_docs.index.sitemap import SitemapClient, parse_sitemap_xml
from tests.helpers import BASE_URL, sitemap_xml


class TestParseSitemap:
	def test_extracts_locations_in_order(self):
		xml = sitemap_xml(["database", "auth/clerk", "cli"])
		assert parse_sitemap_xml(xml) == [
			f"{BASE_URL}/database", f"{BASE_URL}/auth/clerk", f"{BASE_URL}/cli",
		]

	def test_unescapes_entities_and_whitespace(self):
		xml = "<urlset><url><loc>\n  https://docs.convex.dev/a?x=1&amp;y=2  \n</loc></url></urlset>"
		assert parse_sitemap_xml(xml) == ["https://docs.convex.dev/a?x=1&y=2"]

	def test_malformed_documents_degrade(self):
		assert parse_sitemap_xml("") == []
		assert parse_sitemap_xml("<html><body>Service unavailable</body></html>") == []
		assert parse_sitemap_xml("<urlset><url><loc>https://docs.convex.dev/a</loc><url><loc>trunc") == [
			"https://docs.convex.dev/a",
		]
		assert parse_sitemap_xml(None) == []


class TestSitemapClient:
	@pytest.mark.asyncio
	async def test_fetch_urls(self):
		client = SitemapClient(f"{BASE_URL}/sitemap.xml")
		with patch.object(client, "fetch_xml", AsyncMock(return_value=sitemap_xml(["a", "b"]))):
			assert await client.fetch_urls() == [f"{BASE_URL}/a", f"{BASE_URL}/b"]

	@pytest.mark.asyncio
	async def test_empty_sitemap_is_parse_empty(self):
		client = SitemapClient(f"{BASE_URL}/sitemap.xml")
		with patch.object(client, "fetch_xml", AsyncMock(return_value="<urlset></urlset>")):
			with pytest.raises(ParseEmpty):
				await client.fetch_urls()

	def test_parse_empty_is_source_unavailable(self):
		assert issubclass(ParseEmpty, SourceUnavailable)
