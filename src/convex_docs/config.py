"""Configuration system using platformdirs for cross-platform paths."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

APP_NAME = "convex-docs"
APP_AUTHOR = "convex-docs"

DEFAULT_BASE_URL = "https://docs.convex.dev"
BUNDLED_TITLES_FILE = Path(__file__).parent / "data" / "titles.json"


@dataclass
class Config:
	"""Central configuration with XDG/platform conventions."""

	config_dir: Path = field(default_factory=lambda: Path(platformdirs.user_config_dir(APP_NAME)))
	data_dir: Path = field(default_factory=lambda: Path(platformdirs.user_data_dir(APP_NAME)))
	titles_file: Path = BUNDLED_TITLES_FILE

	# Derived
	log_dir: Path = field(init=False)
	sitemap_url: str = field(init=False)

	# Documentation host
	base_url: str = DEFAULT_BASE_URL
	site_name: str = "Convex"
	user_agent: str = "ConvexDocsMCPServer/1.0"
	request_timeout: float = 30.0

	# Cache lifetimes (seconds)
	topic_cache_ttl: float = 60 * 60
	page_cache_ttl: float = 15 * 60

	# Search
	search_threshold: float = 60.0
	max_search_results: int = 10

	log_level: str = "INFO"

	def __post_init__(self) -> None:
		self.base_url = self.base_url.rstrip("/")
		self.log_dir = self.data_dir / "logs"
		self.sitemap_url = f"{self.base_url}/sitemap.xml"

	def ensure_dirs(self) -> None:
		"""Create all required directories."""
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.data_dir.mkdir(parents=True, exist_ok=True)
		self.log_dir.mkdir(parents=True, exist_ok=True)


PATH_FIELDS = {"config_dir", "data_dir", "titles_file"}
FLOAT_FIELDS = {"request_timeout", "topic_cache_ttl", "page_cache_ttl", "search_threshold"}
INT_FIELDS = {"max_search_results"}


def _coerce(attr: str, val):
	if attr in PATH_FIELDS:
		return Path(os.path.expanduser(str(val)))
	if attr in FLOAT_FIELDS:
		return float(val)
	if attr in INT_FIELDS:
		return int(val)
	return val


def _apply_env_overrides(config: Config) -> Config:
	"""Apply CONVEX_DOCS_* environment variable overrides."""
	env_map = {
		"CONVEX_DOCS_CONFIG_DIR": "config_dir",
		"CONVEX_DOCS_DATA_DIR": "data_dir",
		"CONVEX_DOCS_TITLES_FILE": "titles_file",
		"CONVEX_DOCS_BASE_URL": "base_url",
		"CONVEX_DOCS_TOPIC_CACHE_TTL": "topic_cache_ttl",
		"CONVEX_DOCS_PAGE_CACHE_TTL": "page_cache_ttl",
		"CONVEX_DOCS_REQUEST_TIMEOUT": "request_timeout",
		"CONVEX_DOCS_SEARCH_THRESHOLD": "search_threshold",
		"CONVEX_DOCS_MAX_SEARCH_RESULTS": "max_search_results",
		"CONVEX_DOCS_LOG_LEVEL": "log_level",
	}
	for env_key, attr in env_map.items():
		val = os.getenv(env_key)
		if val:
			setattr(config, attr, _coerce(attr, val))
	# Recompute derived values after overrides
	config.__post_init__()
	return config


def _apply_toml(config: Config) -> Config:
	"""Apply config.toml overrides if file exists."""
	toml_path = config.config_dir / "config.toml"
	if not toml_path.exists():
		return config

	with open(toml_path, "rb") as f:
		data = tomllib.load(f)

	derived = {"log_dir", "sitemap_url"}
	for key, val in data.items():
		if hasattr(config, key) and key not in derived:
			setattr(config, key, _coerce(key, val))

	config.__post_init__()
	return config


def load_config() -> Config:
	"""Load config with precedence: env vars > config.toml > defaults."""
	config = Config()
	# config_dir itself may come from the environment
	config_dir = os.getenv("CONVEX_DOCS_CONFIG_DIR")
	if config_dir:
		config.config_dir = Path(os.path.expanduser(config_dir))
	config = _apply_toml(config)
	config = _apply_env_overrides(config)
	config.ensure_dirs()
	return config


# Singleton
_config: Config | None = None


def get_config() -> Config:
	"""Get or create the global config instance."""
	global _config
	if _config is None:
		_config = load_config()
	return _config
