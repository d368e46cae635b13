"""
Topic search: a fuzzy index for the live topic list and the deterministic
substring scoring used for ranking and for the static fallback.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from rapidfuzz import fuzz, utils

from ..models import Topic

logger = logging.getLogger(__name__)

# Relative weight of each field in the fuzzy relevance score
FIELD_WEIGHTS = {
	"title": 0.5,
	"description": 0.3,
	"path": 0.2,
}

DEFAULT_THRESHOLD = 60.0
MIN_MATCH_CHARS = 2
DEFAULT_LIMIT = 10


def _field_score(query: str, value: str) -> float:
	"""Similarity of a query to one field (0-100)."""
	if not value:
		return 0.0
	# A field shorter than the query would otherwise score 100 just by occurring inside it
	if len(value) < len(query):
		return fuzz.ratio(query, value)
	return fuzz.partial_ratio(query, value)


@dataclass
class SearchMatch:
	"""A fuzzy hit with its weighted relevance (0-100, higher is better)."""
	topic: Topic
	relevance: float
	position: int


class FuzzySearchIndex:
	"""
	Typo-tolerant search over a flattened topic list.

	Each field is compared with rapidfuzz's partial ratio, so partial terms
	and small typos still match. A topic is a hit when any field clears the
	threshold; hits are ordered by the weighted sum across fields.

	Usage:
		index = FuzzySearchIndex(flat_topics)
		topics = index.search("paginaton")
	"""

	def __init__(self, topics: list[Topic], threshold: float = DEFAULT_THRESHOLD):
		self.topics = topics
		self.threshold = threshold
		self._fields = [
			{
				"title": utils.default_process(topic.title),
				"description": utils.default_process(topic.description or ""),
				"path": utils.default_process(topic.path),
			}
			for topic in topics
		]

	def __len__(self) -> int:
		return len(self.topics)

	def match(self, query: str) -> list[SearchMatch]:
		"""All hits with their relevance, best first."""
		processed = utils.default_process(query)
		if len(processed) < MIN_MATCH_CHARS:
			return []

		matches: list[SearchMatch] = []
		for position, (topic, fields) in enumerate(zip(self.topics, self._fields)):
			scores = {
				name: _field_score(processed, value)
				for name, value in fields.items()
			}
			if max(scores.values()) < self.threshold:
				continue
			relevance = sum(FIELD_WEIGHTS[name] * score for name, score in scores.items())
			matches.append(SearchMatch(topic=topic, relevance=relevance, position=position))

		matches.sort(key=lambda m: (-m.relevance, m.position))
		return matches

	def search(self, query: str) -> list[Topic]:
		"""Matching topics, most relevant first. No truncation."""
		return [m.topic for m in self.match(query)]


def filter_topics(topics: Iterable[Topic], query: str) -> list[Topic]:
	"""Topics whose title, path or description contains the query (case-insensitive)."""
	needle = query.lower()
	return [
		topic for topic in topics
		if needle in topic.title.lower()
		or needle in topic.path.lower()
		or (topic.description and needle in topic.description.lower())
	]


def score_topic(topic: Topic, query: str) -> int:
	"""Deterministic relevance of a topic for a query."""
	query_lower = query.lower()
	title = topic.title.lower()
	path = topic.path.lower()
	description = (topic.description or "").lower()

	score = 0
	if title == query_lower:
		score += 100
	elif query_lower in title:
		score += 50

	if query_lower in path:
		score += 30
	if query_lower in description:
		score += 20

	for word in query_lower.split():
		if len(word) > 2:
			if word in title:
				score += 10
			if word in path:
				score += 5
			if word in description:
				score += 5

	return score


def rank_topics(topics: Iterable[Topic], query: str, limit: int = DEFAULT_LIMIT) -> list[tuple[Topic, int]]:
	"""Score topics and keep the top `limit`; ties keep their incoming order."""
	scored = [(topic, score_topic(topic, query)) for topic in topics]
	scored.sort(key=lambda pair: pair[1], reverse=True)
	return scored[:limit]
