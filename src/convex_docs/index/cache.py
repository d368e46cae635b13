"""
Topic Index Cache - fetch/refresh/expire lifecycle for the topic tree.

States: EMPTY -> FETCHING -> FRESH -> (ttl elapsed) STALE -> FETCHING ...
A failed refresh keeps serving the previous snapshot however old it is;
only a failure with no snapshot at all reaches the caller.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from ..models import Topic
from .tree import flatten_topics

logger = logging.getLogger(__name__)

TreeLoader = Callable[[], Awaitable[list[Topic]]]


class TopicIndexCache:
	"""
	Caches the hierarchical topic tree and its flattened projection.

	Usage:
		cache = TopicIndexCache(loader, ttl=3600)
		roots = await cache.get_tree()
		flat = await cache.get_flat()
	"""

	def __init__(
		self,
		loader: TreeLoader,
		ttl: float = 60 * 60,
		clock: Callable[[], float] = time.monotonic,
	):
		"""
		Args:
			loader: Coroutine function producing a fresh root topic list
			ttl: Seconds a snapshot stays fresh
			clock: Monotonic time source (injectable for tests)
		"""
		self._loader = loader
		self.ttl = ttl
		self._clock = clock
		self._lock = asyncio.Lock()

		self._tree: Optional[list[Topic]] = None
		self._flat: Optional[list[Topic]] = None
		self._flat_version = -1
		self._last_refresh = 0.0
		self.version = 0

	@property
	def last_refresh(self) -> Optional[float]:
		"""Clock reading of the last successful refresh, None while EMPTY."""
		return self._last_refresh if self._tree is not None else None

	@property
	def has_snapshot(self) -> bool:
		return self._tree is not None

	def is_fresh(self) -> bool:
		return self._tree is not None and self._clock() - self._last_refresh < self.ttl

	async def get_tree(self) -> list[Topic]:
		"""Current root topics, refreshing when the snapshot is missing or expired."""
		if self.is_fresh():
			return self._tree

		async with self._lock:
			# Another caller may have refreshed while we waited
			if self.is_fresh():
				return self._tree

			started = self._clock()
			try:
				tree = await self._loader()
			except Exception as e:
				if self._tree is not None:
					logger.warning(f"Topic index refresh failed, serving stale snapshot: {e}")
					return self._tree
				raise

			self._tree = tree
			self._flat = None
			self._last_refresh = started
			self.version += 1
			logger.info(f"Topic index refreshed: {len(tree)} sections (version {self.version})")
			return self._tree

	async def get_flat(self) -> list[Topic]:
		"""Flattened topics, rebuilt only when the tree snapshot changes."""
		if self._flat is not None and self._flat_version == self.version and self.is_fresh():
			return self._flat

		tree = await self.get_tree()
		if self._flat is None or self._flat_version != self.version:
			self._flat = flatten_topics(tree)
			self._flat_version = self.version
		return self._flat

	def invalidate(self) -> None:
		"""Drop every snapshot, returning to the EMPTY state."""
		self._tree = None
		self._flat = None
		self._flat_version = -1
		self._last_refresh = 0.0
