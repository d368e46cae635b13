"""
Topic sources - the live sitemap index, the bundled catalog, and the
fallback composition the query layer uses.
"""

import logging
from typing import Optional, Protocol

from ..errors import ParseEmpty
from ..models import Topic
from .cache import TopicIndexCache
from .catalog import STATIC_CATALOG, filter_by_section, find_topic
from .search import DEFAULT_THRESHOLD, FuzzySearchIndex, filter_topics
from .sitemap import SitemapClient
from .tree import TopicTreeBuilder, flatten_topics

logger = logging.getLogger(__name__)


class TopicSource(Protocol):
	"""What the query layer needs from a topic provider."""

	name: str

	async def get_tree(self) -> list[Topic]: ...

	async def get_flat(self) -> list[Topic]: ...

	async def search(self, query: str) -> list[Topic]: ...

	async def filter_by_section(self, section: str) -> list[Topic]: ...

	async def find(self, path: str) -> Optional[Topic]: ...


class DynamicSource:
	"""
	Topics built from the live sitemap, cached with a TTL and searched fuzzily.

	Usage:
		source = DynamicSource(SitemapClient(url), TopicTreeBuilder(titles, base_url))
		roots = await source.get_tree()
	"""

	name = "dynamic"

	def __init__(
		self,
		sitemap: SitemapClient,
		builder: TopicTreeBuilder,
		cache: Optional[TopicIndexCache] = None,
		ttl: float = 60 * 60,
		search_threshold: float = DEFAULT_THRESHOLD,
	):
		self.sitemap = sitemap
		self.builder = builder
		self.cache = cache or TopicIndexCache(self._load_tree, ttl=ttl)
		self.search_threshold = search_threshold
		self._index: Optional[FuzzySearchIndex] = None

	async def _load_tree(self) -> list[Topic]:
		urls = await self.sitemap.fetch_urls()
		tree = self.builder.build(urls)
		if not tree:
			raise ParseEmpty(f"Sitemap {self.sitemap.sitemap_url} yielded no documentation topics")
		return tree

	async def get_tree(self) -> list[Topic]:
		return await self.cache.get_tree()

	async def get_flat(self) -> list[Topic]:
		return await self.cache.get_flat()

	async def search_index(self) -> FuzzySearchIndex:
		"""The fuzzy index, rebuilt whenever the flattened list is replaced."""
		flat = await self.cache.get_flat()
		if self._index is None or self._index.topics is not flat:
			self._index = FuzzySearchIndex(flat, threshold=self.search_threshold)
			logger.debug(f"Rebuilt search index over {len(flat)} topics")
		return self._index

	async def search(self, query: str) -> list[Topic]:
		index = await self.search_index()
		return index.search(query)

	async def filter_by_section(self, section: str) -> list[Topic]:
		return filter_by_section(await self.cache.get_tree(), section)

	async def find(self, path: str) -> Optional[Topic]:
		return find_topic(path, await self.cache.get_tree())

	def clear_cache(self) -> None:
		self.cache.invalidate()
		self._index = None


class StaticSource:
	"""The bundled catalog, searched by plain substring match."""

	name = "static"

	def __init__(self, topics: Optional[list[Topic]] = None):
		self.topics = topics if topics is not None else STATIC_CATALOG
		self._flat = flatten_topics(self.topics)

	async def get_tree(self) -> list[Topic]:
		return self.topics

	async def get_flat(self) -> list[Topic]:
		return self._flat

	async def search(self, query: str) -> list[Topic]:
		return filter_topics(self._flat, query)

	async def filter_by_section(self, section: str) -> list[Topic]:
		return filter_by_section(self.topics, section)

	async def find(self, path: str) -> Optional[Topic]:
		return find_topic(path, self.topics)


class FallbackSource:
	"""
	Tries the primary source and answers from the fallback on any failure.

	Usage:
		source = FallbackSource(DynamicSource(...), StaticSource())
	"""

	def __init__(self, primary: TopicSource, fallback: TopicSource):
		self.primary = primary
		self.fallback = fallback
		self.name = f"{primary.name}+{fallback.name}"
		self.last_served_by: Optional[str] = None

	async def _call(self, operation: str, context: str, *args):
		try:
			result = await getattr(self.primary, operation)(*args)
			self.last_served_by = self.primary.name
			return result
		except Exception as e:
			logger.warning(
				f"{operation}({context}) failed on {self.primary.name} source, "
				f"using {self.fallback.name}: {e}"
			)
		result = await getattr(self.fallback, operation)(*args)
		self.last_served_by = self.fallback.name
		return result

	async def get_tree(self) -> list[Topic]:
		return await self._call("get_tree", "")

	async def get_flat(self) -> list[Topic]:
		return await self._call("get_flat", "")

	async def search(self, query: str) -> list[Topic]:
		return await self._call("search", f"query={query!r}", query)

	async def filter_by_section(self, section: str) -> list[Topic]:
		return await self._call("filter_by_section", f"section={section!r}", section)

	async def find(self, path: str) -> Optional[Topic]:
		return await self._call("find", f"path={path!r}", path)

	def clear_cache(self) -> None:
		for source in (self.primary, self.fallback):
			clear = getattr(source, "clear_cache", None)
			if clear:
				clear()
