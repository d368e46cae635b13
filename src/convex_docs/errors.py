"""Typed failures raised by the documentation index and page pipeline."""


class DocsError(Exception):
	"""Base class for all convex-docs failures."""
	code = "docs_error"


class SourceUnavailable(DocsError):
	"""The documentation host is unreachable or answered with a non-success status."""
	code = "source_unavailable"


class ParseEmpty(SourceUnavailable):
	"""A fetched document yielded nothing usable (no URLs, no topics)."""
	code = "parse_empty"


class NotFound(DocsError):
	"""A requested page does not resolve to a document."""
	code = "not_found"


class InvalidInput(DocsError):
	"""Tool arguments failed validation."""
	code = "invalid_input"
