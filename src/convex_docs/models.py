"""
Documentation Models - Pydantic schemas for topics, pages and tool inputs.

Topics are the central entity: a title, a stable slash-separated path,
an optional description and, on hierarchy nodes only, ordered children.
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import InvalidInput


class Topic(BaseModel):
	"""A documentation page or section."""
	title: str = Field(description="Display name")
	path: str = Field(description="Slash-separated page path, e.g. 'database/indexes'")
	description: Optional[str] = Field(default=None)
	children: Optional[list["Topic"]] = Field(default=None)

	def leaf(self) -> "Topic":
		"""Copy of this topic without its children."""
		return Topic(title=self.title, path=self.path, description=self.description)

	@property
	def has_children(self) -> bool:
		return bool(self.children)


class TitleEntry(BaseModel):
	"""One row of the pre-generated title lookup table."""
	path: str
	title: str
	description: Optional[str] = None


class TitleTableDocument(BaseModel):
	"""The title lookup table as stored on disk."""
	generatedAt: str = Field(default="")
	baseUrl: str = Field(default="")
	totalPages: int = Field(default=0)
	titles: list[TitleEntry] = Field(default_factory=list)


class FetchResult(BaseModel):
	"""Raw page markup returned by the page fetcher."""
	html: str
	url: str
	cached: bool = False


class DocPage(BaseModel):
	"""A rendered documentation page."""
	title: str
	path: str
	url: str
	content: str


class SearchResult(BaseModel):
	"""A ranked search hit."""
	title: str
	path: str
	url: str
	snippet: str
	score: int


class TopicListItem(BaseModel):
	"""A topic as presented by list_convex_topics."""
	title: str
	path: str
	url: str
	description: Optional[str] = None
	children: Optional[list["TopicListItem"]] = None


# Tool inputs

class ListTopicsInput(BaseModel):
	section: Optional[str] = Field(
		default=None,
		description="Optional section to filter by (e.g., 'functions', 'database')",
	)

	@field_validator("section")
	@classmethod
	def _blank_section_means_all(cls, value: Optional[str]) -> Optional[str]:
		if value is not None and not value.strip():
			return None
		return value


class GetPageInput(BaseModel):
	path: str = Field(
		description="The documentation page path (e.g., 'functions/query-functions') or full URL",
	)

	@field_validator("path")
	@classmethod
	def _path_not_blank(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError("path must not be empty")
		return value


class SearchInput(BaseModel):
	query: str = Field(description="Search query to find relevant Convex documentation")

	@field_validator("query")
	@classmethod
	def _query_not_blank(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError("query must not be empty")
		return value


def validate_input(model: type[BaseModel], **kwargs) -> BaseModel:
	"""Validate tool arguments, converting pydantic errors to InvalidInput."""
	try:
		return model(**kwargs)
	except ValidationError as e:
		problems = "; ".join(
			f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
			for err in e.errors()
		)
		raise InvalidInput(f"Invalid arguments: {problems}") from e
