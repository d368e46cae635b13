"""Topic index: title table, sitemap source, tree builder, cache, search and fallback catalog."""

from .cache import TopicIndexCache
from .catalog import STATIC_CATALOG
from .search import FuzzySearchIndex, rank_topics, score_topic
from .sitemap import SitemapClient, parse_sitemap_xml
from .sources import DynamicSource, FallbackSource, StaticSource, TopicSource
from .titles import TitleTable
from .tree import TopicTreeBuilder, flatten_topics

__all__ = [
	"DynamicSource",
	"FallbackSource",
	"FuzzySearchIndex",
	"STATIC_CATALOG",
	"SitemapClient",
	"StaticSource",
	"TitleTable",
	"TopicIndexCache",
	"TopicSource",
	"TopicTreeBuilder",
	"flatten_topics",
	"parse_sitemap_xml",
	"rank_topics",
	"score_topic",
]
