"""
Title Harvester - regenerates the bundled title lookup table.

Offline utility: fetches the sitemap, then every documentation page in
small concurrent batches, and records each page's <title> and meta
description. Not used on the request path.
"""

import asyncio
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

from ..index.sitemap import parse_sitemap_xml
from ..models import TitleEntry, TitleTableDocument

logger = logging.getLogger(__name__)

TITLE_SUFFIX = re.compile(r"\s*\|\s*Convex Developer Hub\s*$", re.IGNORECASE)


def parse_page_metadata(html: str) -> tuple[str, Optional[str]]:
	"""Return (title, description) for a page; title falls back to 'Untitled'."""
	soup = BeautifulSoup(html, "html.parser")

	title_tag = soup.find("title")
	title = title_tag.get_text().strip() if title_tag else ""
	title = TITLE_SUFFIX.sub("", title).strip()

	description = None
	meta = soup.find("meta", attrs={"name": "description"})
	if meta and meta.get("content"):
		description = meta["content"].strip() or None

	return title or "Untitled", description


class TitleHarvester:
	"""
	Builds a TitleTableDocument by crawling every page listed in the sitemap.

	Usage:
		harvester = TitleHarvester("https://docs.convex.dev")
		document = await harvester.run(Path("titles.json"))
	"""

	def __init__(
		self,
		base_url: str,
		concurrency: int = 10,
		batch_delay: float = 0.1,
		timeout: float = 30.0,
		user_agent: str = "ConvexDocsMCPServer/1.0",
	):
		self.base_url = base_url.rstrip("/")
		self.sitemap_url = f"{self.base_url}/sitemap.xml"
		self.concurrency = concurrency
		self.batch_delay = batch_delay
		self.timeout = timeout
		self.user_agent = user_agent

	def url_to_path(self, url: str) -> str:
		path = url.replace(self.base_url + "/", "", 1).rstrip("/")
		return path or "index"

	def doc_urls(self, urls: list[str]) -> list[str]:
		"""Keep on-site, fragment-free URLs."""
		return [url for url in urls if url.startswith(self.base_url) and "#" not in url]

	async def _fetch_entry(self, session: aiohttp.ClientSession, url: str) -> Optional[TitleEntry]:
		try:
			async with session.get(url) as response:
				if response.status != 200:
					logger.warning(f"Failed to fetch {url}: {response.status}")
					return None
				html = await response.text()
		except (aiohttp.ClientError, asyncio.TimeoutError) as e:
			logger.warning(f"Error fetching {url}: {e}")
			return None

		title, description = parse_page_metadata(html)
		return TitleEntry(path=self.url_to_path(url), title=title, description=description)

	async def harvest(self) -> TitleTableDocument:
		"""Crawl the site and return the title document (not written to disk)."""
		async with aiohttp.ClientSession(
			headers={"User-Agent": self.user_agent},
			timeout=aiohttp.ClientTimeout(total=self.timeout),
		) as session:
			async with session.get(self.sitemap_url) as response:
				response.raise_for_status()
				xml = await response.text()

			urls = self.doc_urls(parse_sitemap_xml(xml))
			logger.info(f"Processing {len(urls)} documentation pages...")

			entries: list[TitleEntry] = []
			for start in range(0, len(urls), self.concurrency):
				batch = urls[start:start + self.concurrency]
				results = await asyncio.gather(*(self._fetch_entry(session, url) for url in batch))
				entries.extend(entry for entry in results if entry)

				done = start + len(batch)
				logger.info(f"Progress: {done}/{len(urls)} ({round(done / len(urls) * 100)}%)")

				if done < len(urls):
					await asyncio.sleep(self.batch_delay)

		entries.sort(key=lambda entry: entry.path)
		return TitleTableDocument(
			generatedAt=datetime.now(timezone.utc).isoformat(),
			baseUrl=self.base_url,
			totalPages=len(entries),
			titles=entries,
		)

	async def run(self, output: Path) -> TitleTableDocument:
		"""Harvest and write the JSON document to `output`."""
		document = await self.harvest()
		output.parent.mkdir(parents=True, exist_ok=True)
		with open(output, "w", encoding="utf-8") as f:
			json.dump(document.model_dump(exclude_none=True), f, indent=2)
			f.write("\n")
		logger.info(f"Wrote {document.totalPages} titles to {output}")
		return document
