"""Tests for server startup and tool registration."""

import os
from unittest.mock import patch

import pytest


@pytest.fixture
def server_mcp(tmp_path):
	with patch.dict(os.environ, {
		"CONVEX_DOCS_CONFIG_DIR": str(tmp_path / "config"),
		"CONVEX_DOCS_DATA_DIR": str(tmp_path / "data"),
	}):
		from convex_docs.server import mcp
	return mcp


def test_server_imports(server_mcp):
	"""Server module should import without errors."""
	assert server_mcp is not None


def test_server_tool_names(server_mcp):
	"""Server should register exactly the documentation tools plus health_check."""
	tool_names = set(server_mcp._tool_manager._tools.keys())
	assert tool_names == {
		"health_check",
		"list_convex_topics",
		"get_convex_doc_page",
		"search_convex_docs",
	}
