"""
Title Lookup Table - authoritative page titles and descriptions.

The table is generated offline (see pages.harvest) and bundled as JSON.
Paths missing from it get a title derived from the last path segment.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..models import TitleEntry, TitleTableDocument

logger = logging.getLogger(__name__)


def title_from_segment(path: str) -> str:
	"""'query-functions' -> 'Query Functions' (uses the last path segment)."""
	last_segment = path.split("/")[-1] or path
	return " ".join(word[:1].upper() + word[1:] for word in last_segment.split("-"))


class TitleTable:
	"""Read-only path -> title/description lookup."""

	def __init__(self, entries: Optional[list[TitleEntry]] = None, site_name: str = "Convex"):
		self.site_name = site_name
		self._entries: dict[str, TitleEntry] = {}
		for entry in entries or []:
			# First occurrence wins
			self._entries.setdefault(entry.path, entry)
		self.generated_at = ""

	@classmethod
	def load(cls, path: Path, site_name: str = "Convex") -> "TitleTable":
		"""Load the table from disk. A missing or corrupt file yields an empty table."""
		try:
			with open(path, encoding="utf-8") as f:
				document = TitleTableDocument.model_validate(json.load(f))
		except FileNotFoundError:
			logger.warning(f"Title table not found at {path}, deriving titles from paths")
			return cls(site_name=site_name)
		except (json.JSONDecodeError, ValidationError, OSError) as e:
			logger.warning(f"Title table at {path} is unreadable ({e}), deriving titles from paths")
			return cls(site_name=site_name)

		table = cls(document.titles, site_name=site_name)
		table.generated_at = document.generatedAt
		logger.debug(f"Loaded {len(table)} titles from {path}")
		return table

	def __len__(self) -> int:
		return len(self._entries)

	def __contains__(self, path: str) -> bool:
		return path in self._entries

	def get(self, path: str) -> Optional[TitleEntry]:
		return self._entries.get(path)

	def title_for(self, path: str) -> str:
		entry = self._entries.get(path)
		if entry:
			return entry.title
		return title_from_segment(path)

	def description_for(self, path: str) -> str:
		entry = self._entries.get(path)
		if entry and entry.description:
			return entry.description

		title = self.title_for(path)
		parts = path.split("/")
		if len(parts) == 1:
			return f"{self.site_name} {title} documentation"
		section = self.title_for(parts[0])
		return f"{title} - {section}"
