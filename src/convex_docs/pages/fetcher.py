"""
Page Fetcher - downloads documentation pages with a short-lived per-URL cache.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

import aiohttp

from ..errors import NotFound, SourceUnavailable
from ..models import FetchResult

logger = logging.getLogger(__name__)


def build_doc_url(path: str, base_url: str) -> str:
	"""Full http(s) URLs pass through; anything else is joined onto the docs host."""
	if path.startswith("http://") or path.startswith("https://"):
		return path
	return f"{base_url.rstrip('/')}/{path.strip('/')}"


@dataclass
class _CachedPage:
	html: str
	timestamp: float


class PageFetcher:
	"""
	Fetches raw page HTML, caching each URL for `ttl` seconds.

	Usage:
		fetcher = PageFetcher("https://docs.convex.dev")
		result = await fetcher.fetch("database/indexes")
	"""

	def __init__(
		self,
		base_url: str,
		ttl: float = 15 * 60,
		timeout: float = 30.0,
		user_agent: str = "ConvexDocsMCPServer/1.0",
		clock: Callable[[], float] = time.monotonic,
	):
		self.base_url = base_url
		self.ttl = ttl
		self.timeout = timeout
		self.user_agent = user_agent
		self._clock = clock
		self._cache: dict[str, _CachedPage] = {}

	async def _download(self, url: str) -> str:
		try:
			async with aiohttp.ClientSession(
				headers={
					"User-Agent": self.user_agent,
					"Accept": "text/html,application/xhtml+xml",
				},
				timeout=aiohttp.ClientTimeout(total=self.timeout),
			) as session:
				async with session.get(url) as response:
					if response.status == 404:
						raise NotFound(f"Page not found: {url}")
					if response.status != 200:
						raise SourceUnavailable(
							f"Failed to fetch {url}: {response.status} {response.reason or ''}".rstrip()
						)
					return await response.text()
		except (aiohttp.ClientError, asyncio.TimeoutError) as e:
			raise SourceUnavailable(f"Failed to fetch {url}: {e}") from e

	async def fetch(self, path: str) -> FetchResult:
		"""Return the page HTML, from cache when still fresh."""
		url = build_doc_url(path, self.base_url)

		cached = self._cache.get(url)
		if cached and self._clock() - cached.timestamp < self.ttl:
			return FetchResult(html=cached.html, url=url, cached=True)

		html = await self._download(url)
		self._cache[url] = _CachedPage(html=html, timestamp=self._clock())
		return FetchResult(html=html, url=url, cached=False)

	def clear_cache(self) -> None:
		self._cache.clear()

	def stats(self) -> dict:
		return {
			"size": len(self._cache),
			"urls": list(self._cache.keys()),
		}
