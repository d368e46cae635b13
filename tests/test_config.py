"""Tests for the configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

from convex_docs.config import BUNDLED_TITLES_FILE, Config, _apply_env_overrides, get_config, load_config


def test_config_defaults():
	"""Config should have sensible defaults."""
	config = Config()
	assert config.config_dir.is_absolute()
	assert config.data_dir.is_absolute()
	assert config.log_dir == config.data_dir / "logs"
	assert config.base_url == "https://docs.convex.dev"
	assert config.sitemap_url == "https://docs.convex.dev/sitemap.xml"
	assert config.titles_file == BUNDLED_TITLES_FILE
	assert config.topic_cache_ttl == 3600
	assert config.page_cache_ttl == 900
	assert config.search_threshold == 60
	assert config.max_search_results == 10


def test_bundled_titles_file_ships_with_package():
	assert BUNDLED_TITLES_FILE.exists()


def test_base_url_trailing_slash_stripped():
	config = Config(base_url="https://docs.example.dev/")
	assert config.base_url == "https://docs.example.dev"
	assert config.sitemap_url == "https://docs.example.dev/sitemap.xml"


def test_config_env_overrides():
	"""Environment variables should override defaults."""
	config = Config()
	with patch.dict(os.environ, {
		"CONVEX_DOCS_DATA_DIR": "/tmp/test-data",
		"CONVEX_DOCS_BASE_URL": "http://localhost:3000",
		"CONVEX_DOCS_TOPIC_CACHE_TTL": "120",
		"CONVEX_DOCS_MAX_SEARCH_RESULTS": "5",
	}):
		config = _apply_env_overrides(config)
		assert config.data_dir == Path("/tmp/test-data")
		# Derived values should be recomputed
		assert config.log_dir == Path("/tmp/test-data/logs")
		assert config.sitemap_url == "http://localhost:3000/sitemap.xml"
		assert config.topic_cache_ttl == 120.0
		assert config.max_search_results == 5


def test_config_ensure_dirs(tmp_path: Path):
	"""ensure_dirs should create all required directories."""
	config = Config(
		config_dir=tmp_path / "config",
		data_dir=tmp_path / "data",
	)
	assert not config.config_dir.exists()

	config.ensure_dirs()

	assert config.config_dir.exists()
	assert config.data_dir.exists()
	assert config.log_dir.exists()


def test_load_config_reads_toml(tmp_path: Path):
	"""config.toml values apply, env vars win over them."""
	config_dir = tmp_path / "config"
	config_dir.mkdir()
	(config_dir / "config.toml").write_text(
		'page_cache_ttl = 60\nsearch_threshold = 75\nlog_level = "DEBUG"\n'
	)
	with patch.dict(os.environ, {
		"CONVEX_DOCS_CONFIG_DIR": str(config_dir),
		"CONVEX_DOCS_DATA_DIR": str(tmp_path / "data"),
		"CONVEX_DOCS_LOG_LEVEL": "WARNING",
	}):
		config = load_config()
	assert config.page_cache_ttl == 60.0
	assert config.search_threshold == 75.0
	assert config.log_level == "WARNING"
	assert config.data_dir.exists()


def test_get_config_is_cached(tmp_path: Path):
	"""get_config should build the config once and reuse it."""
	with patch.dict(os.environ, {
		"CONVEX_DOCS_CONFIG_DIR": str(tmp_path / "config"),
		"CONVEX_DOCS_DATA_DIR": str(tmp_path / "data"),
	}), patch("convex_docs.config._config", None):
		first = get_config()
		assert get_config() is first
		assert first.data_dir == tmp_path / "data"
