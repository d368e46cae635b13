"""
Topic Tree Builder - turns a flat list of sitemap URLs into a two-level hierarchy.

Single-segment paths are root candidates. Deeper paths are children of the
root named by their parent prefix; when that root does not exist they are
reattached to the root named by their first segment, and failing that they
become a root of their own. No path is ever dropped.
"""

import logging
from typing import Iterable, Optional

from ..models import Topic
from .titles import TitleTable

logger = logging.getLogger(__name__)

# Common sections first, in this order; everything else sorts by title
PRIORITY_SECTIONS = [
	"get-started",
	"tutorial",
	"quickstarts",
	"functions",
	"database",
	"auth",
	"file-storage",
	"scheduling",
	"search",
	"ai",
	"agents",
	"client",
	"production",
	"cli",
	"api",
]


def normalize_path(url: str, base_url: str) -> Optional[str]:
	"""
	Reduce a sitemap URL to a documentation path.

	Returns None for fragment URLs, off-site URLs and the site root.
	"""
	url = url.strip()
	prefix = base_url.rstrip("/") + "/"
	if url.startswith(prefix):
		path = url[len(prefix):]
	elif url == base_url.rstrip("/"):
		return None
	elif "://" in url:
		return None
	else:
		path = url

	path = path.strip("/")
	if not path or "#" in path:
		return None
	return path


def flatten_topics(topics: Iterable[Topic]) -> list[Topic]:
	"""Depth-first flattening; entries carry no children."""
	result: list[Topic] = []
	for topic in topics:
		result.append(topic.leaf())
		if topic.children:
			result.extend(flatten_topics(topic.children))
	return result


def _root_sort_key(topic: Topic) -> tuple:
	if topic.path in PRIORITY_SECTIONS:
		return (0, PRIORITY_SECTIONS.index(topic.path), "")
	return (1, 0, topic.title.casefold())


class TopicTreeBuilder:
	"""
	Builds the root topic list from sitemap URLs.

	Usage:
		builder = TopicTreeBuilder(titles, "https://docs.convex.dev")
		roots = builder.build(urls)
	"""

	def __init__(self, titles: TitleTable, base_url: str):
		self.titles = titles
		self.base_url = base_url

	def to_flat_topics(self, urls: Iterable[str]) -> list[Topic]:
		"""Normalize URLs into unique, titled topics (first occurrence wins)."""
		topics: list[Topic] = []
		seen: set[str] = set()
		for url in urls:
			path = normalize_path(url, self.base_url)
			if path is None or path in seen:
				continue
			seen.add(path)
			topics.append(Topic(
				title=self.titles.title_for(path),
				path=path,
				description=self.titles.description_for(path),
			))
		return topics

	def build(self, urls: Iterable[str]) -> list[Topic]:
		"""Build the ordered root topics for a list of sitemap URLs."""
		return self.build_hierarchy(self.to_flat_topics(urls))

	def build_hierarchy(self, flat_topics: list[Topic]) -> list[Topic]:
		roots: dict[str, Topic] = {}
		children_by_parent: dict[str, list[Topic]] = {}

		# Parents before children; sorted() is stable so discovery order holds within a depth
		for topic in sorted(flat_topics, key=lambda t: t.path.count("/")):
			parts = topic.path.split("/")
			if len(parts) == 1:
				roots[topic.path] = topic.model_copy(update={"children": []})
			else:
				parent_path = "/".join(parts[:-1])
				children_by_parent.setdefault(parent_path, []).append(topic)

		for parent_path, children in children_by_parent.items():
			parent = roots.get(parent_path)
			if parent is not None:
				parent.children.extend(children)
				continue

			for child in children:
				ancestor = roots.get(child.path.split("/")[0])
				if ancestor is not None:
					ancestor.children.append(child)
				else:
					logger.debug(f"No section for {child.path}, promoting to top level")
					roots[child.path] = child.model_copy(update={"children": []})

		ordered = sorted(roots.values(), key=_root_sort_key)
		for root in ordered:
			if not root.children:
				root.children = None
		return ordered
