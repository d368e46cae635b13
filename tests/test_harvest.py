"""Tests for the title table harvester."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from convex_docs.models import TitleEntry
from convex_docs.pages.harvest import TitleHarvester, parse_page_metadata
from tests.helpers import BASE_URL, sitemap_xml


class TestParsePageMetadata:
	def test_title_and_description(self):
		html = (
			'<html><head><title>Cron Jobs | Convex Developer Hub</title>'
			'<meta name="description" content=" Schedule recurring functions "></head></html>'
		)
		assert parse_page_metadata(html) == ("Cron Jobs", "Schedule recurring functions")

	def test_untitled_without_title(self):
		assert parse_page_metadata("<html><body></body></html>") == ("Untitled", None)

	def test_empty_description_ignored(self):
		html = '<title>Auth</title><meta name="description" content="   ">'
		assert parse_page_metadata(html) == ("Auth", None)


class TestTitleHarvester:
	@pytest.fixture
	def harvester(self) -> TitleHarvester:
		return TitleHarvester(BASE_URL + "/", batch_delay=0)

	def test_url_to_path(self, harvester):
		assert harvester.url_to_path(f"{BASE_URL}/database/indexes/") == "database/indexes"
		assert harvester.url_to_path(f"{BASE_URL}/") == "index"

	def test_doc_urls_filters_fragments_and_other_hosts(self, harvester):
		urls = [f"{BASE_URL}/auth", f"{BASE_URL}/auth#clerk", "https://stack.convex.dev/x"]
		assert harvester.doc_urls(urls) == [f"{BASE_URL}/auth"]

	@pytest.mark.asyncio
	async def test_harvest_batches_and_sorts(self, harvester, tmp_path):
		harvester.concurrency = 2

		sitemap_response = MagicMock()
		sitemap_response.raise_for_status = MagicMock()
		sitemap_response.text = AsyncMock(return_value=sitemap_xml(["zeta", "auth", "cli"]))
		get_cm = MagicMock()
		get_cm.__aenter__ = AsyncMock(return_value=sitemap_response)
		get_cm.__aexit__ = AsyncMock(return_value=False)

		session = MagicMock()
		session.get = MagicMock(return_value=get_cm)
		session_cm = MagicMock()
		session_cm.__aenter__ = AsyncMock(return_value=session)
		session_cm.__aexit__ = AsyncMock(return_value=False)

		async def fake_entry(_session, url):
			path = harvester.url_to_path(url)
			if path == "cli":
				return None
			return TitleEntry(path=path, title=path.title())

		output = tmp_path / "out" / "titles.json"
		with patch("convex_docs.pages.harvest.aiohttp.ClientSession", return_value=session_cm), \
			patch.object(harvester, "_fetch_entry", side_effect=fake_entry) as fetch_entry:
			document = await harvester.run(output)

		assert fetch_entry.call_count == 3
		assert [e.path for e in document.titles] == ["auth", "zeta"]
		assert document.totalPages == 2
		assert document.baseUrl == BASE_URL

		written = json.loads(output.read_text())
		assert written["titles"][0] == {"path": "auth", "title": "Auth"}
