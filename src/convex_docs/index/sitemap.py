"""
Sitemap source - fetches the documentation sitemap and extracts page URLs.

Extraction is a targeted <loc> scan rather than a full XML parse, so
partial or malformed documents degrade to fewer (or zero) URLs.
"""

import asyncio
import html
import logging
import re

import aiohttp

from ..errors import ParseEmpty, SourceUnavailable

logger = logging.getLogger(__name__)

LOC_PATTERN = re.compile(r"<loc>\s*([^<]+?)\s*</loc>", re.IGNORECASE)


def parse_sitemap_xml(xml: str) -> list[str]:
	"""Return every <loc> value in document order. Never raises."""
	if not isinstance(xml, str):
		return []
	return [html.unescape(match.group(1)) for match in LOC_PATTERN.finditer(xml)]


class SitemapClient:
	"""
	Fetches sitemap.xml from the documentation host.

	Usage:
		client = SitemapClient("https://docs.convex.dev/sitemap.xml")
		urls = await client.fetch_urls()
	"""

	def __init__(
		self,
		sitemap_url: str,
		timeout: float = 30.0,
		user_agent: str = "ConvexDocsMCPServer/1.0",
	):
		self.sitemap_url = sitemap_url
		self.timeout = timeout
		self.user_agent = user_agent

	async def fetch_xml(self) -> str:
		"""Download the raw sitemap document."""
		try:
			async with aiohttp.ClientSession(
				headers={"User-Agent": self.user_agent},
				timeout=aiohttp.ClientTimeout(total=self.timeout),
			) as session:
				async with session.get(self.sitemap_url) as response:
					if response.status != 200:
						raise SourceUnavailable(
							f"Failed to fetch sitemap {self.sitemap_url}: {response.status}"
						)
					return await response.text()
		except (aiohttp.ClientError, asyncio.TimeoutError) as e:
			raise SourceUnavailable(f"Failed to fetch sitemap {self.sitemap_url}: {e}") from e

	async def fetch_urls(self) -> list[str]:
		"""Download the sitemap and return its page URLs."""
		xml = await self.fetch_xml()
		urls = parse_sitemap_xml(xml)
		if not urls:
			raise ParseEmpty(f"Sitemap {self.sitemap_url} contained no <loc> entries")
		logger.debug(f"Sitemap {self.sitemap_url}: {len(urls)} URLs")
		return urls
