"""
Docs Service - the three query operations behind the MCP tools.

Every operation reads through a FallbackSource, so a failing live sitemap
is answered from the bundled catalog instead of surfacing an error.
"""

import logging
from typing import Optional

from .config import Config
from .index.search import rank_topics
from .index.sitemap import SitemapClient
from .index.sources import DynamicSource, FallbackSource, StaticSource, TopicSource
from .index.titles import TitleTable
from .index.tree import TopicTreeBuilder
from .models import (
	DocPage,
	GetPageInput,
	ListTopicsInput,
	SearchInput,
	SearchResult,
	Topic,
	TopicListItem,
	validate_input,
)
from .pages.fetcher import PageFetcher
from .pages.markdown import create_snippet, extract_title, html_to_markdown

logger = logging.getLogger(__name__)


def build_default_source(config: Config) -> FallbackSource:
	"""Live sitemap index backed by the static catalog."""
	titles = TitleTable.load(config.titles_file, site_name=config.site_name)
	dynamic = DynamicSource(
		SitemapClient(
			config.sitemap_url,
			timeout=config.request_timeout,
			user_agent=config.user_agent,
		),
		TopicTreeBuilder(titles, config.base_url),
		ttl=config.topic_cache_ttl,
		search_threshold=config.search_threshold,
	)
	return FallbackSource(dynamic, StaticSource())


def count_items(items: list[TopicListItem]) -> int:
	"""Number of items including every nested child."""
	return sum(1 + count_items(item.children or []) for item in items)


class DocsService:
	"""
	List, fetch and search documentation topics.

	Usage:
		service = DocsService(load_config())
		listing = await service.list_topics("auth")
		page = await service.get_page("database/indexes")
		hits = await service.search("pagination")
	"""

	def __init__(
		self,
		config: Config,
		source: Optional[TopicSource] = None,
		fetcher: Optional[PageFetcher] = None,
	):
		self.config = config
		self.source = source if source is not None else build_default_source(config)
		self.fetcher = fetcher or PageFetcher(
			config.base_url,
			ttl=config.page_cache_ttl,
			timeout=config.request_timeout,
			user_agent=config.user_agent,
		)

	def url_for(self, path: str) -> str:
		return f"{self.config.base_url}/{path}"

	def format_topic(self, topic: Topic) -> TopicListItem:
		item = TopicListItem(title=topic.title, path=topic.path, url=self.url_for(topic.path))
		if topic.description:
			item.description = topic.description
		if topic.children:
			item.children = [self.format_topic(child) for child in topic.children]
		return item

	async def list_topics(self, section: Optional[str] = None) -> dict:
		"""Hierarchical topic listing, optionally narrowed to matching sections."""
		params = validate_input(ListTopicsInput, section=section)

		if params.section:
			topics = await self.source.filter_by_section(params.section)
		else:
			topics = await self.source.get_tree()

		items = [self.format_topic(topic) for topic in topics]
		return {
			"topics": [item.model_dump(exclude_none=True) for item in items],
			"totalCount": count_items(items),
		}

	async def get_page(self, path: str) -> dict:
		"""Fetch a page and render it as markdown."""
		params = validate_input(GetPageInput, path=path)

		result = await self.fetcher.fetch(params.path)
		if result.cached:
			logger.info(f"[cache hit] {result.url}")
		else:
			logger.info(f"[fetched] {result.url}")

		title = extract_title(result.html, site_name=self.config.site_name)
		if title == "Untitled":
			topic = await self.source.find(params.path)
			if topic:
				title = topic.title

		page = DocPage(
			title=title,
			path=params.path,
			url=result.url,
			content=html_to_markdown(result.html),
		)
		return page.model_dump()

	async def search(self, query: str) -> dict:
		"""Ranked topics for a query, best first, at most max_search_results."""
		params = validate_input(SearchInput, query=query)

		matches = await self.source.search(params.query)
		ranked = rank_topics(matches, params.query, limit=self.config.max_search_results)

		results = [
			SearchResult(
				title=topic.title,
				path=topic.path,
				url=self.url_for(topic.path),
				snippet=create_snippet(topic.description) if topic.description else f"Documentation page: {topic.title}",
				score=score,
			)
			for topic, score in ranked
		]
		logger.debug(f"search({params.query!r}): {len(matches)} matches, returning {len(results)}")
		return {
			"results": [r.model_dump() for r in results],
			"query": params.query,
		}

	def clear_cache(self) -> None:
		"""Drop the topic index and page caches."""
		clear = getattr(self.source, "clear_cache", None)
		if clear:
			clear()
		self.fetcher.clear_cache()

	def status(self) -> dict:
		"""Cache and source state for health checks."""
		status = {
			"source": getattr(self.source, "name", type(self.source).__name__),
			"last_served_by": getattr(self.source, "last_served_by", None),
			"page_cache_size": self.fetcher.stats()["size"],
		}
		primary = getattr(self.source, "primary", None)
		cache = getattr(primary, "cache", None)
		if cache is not None:
			status["topic_index"] = {
				"has_snapshot": cache.has_snapshot,
				"fresh": cache.is_fresh(),
				"version": cache.version,
			}
		return status
