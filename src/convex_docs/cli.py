"""CLI for convex-docs: serve, doctor, and fetch-titles commands."""

import argparse
import asyncio
import json
import platform
import sys
from importlib.metadata import version as pkg_version
from pathlib import Path

from .config import BUNDLED_TITLES_FILE, load_config
from .logging_config import setup_logging


def cmd_serve(args: argparse.Namespace) -> None:
	"""Run the MCP server (stdio transport)."""
	from .server import mcp
	mcp.run()


def _check_titles_file(titles_file: Path) -> tuple[str, str | None]:
	"""Validate the title table. Returns (status, issue_or_none)."""
	if not titles_file.exists():
		return "not found (titles derived from paths)", f"title table missing: {titles_file}"
	try:
		with open(titles_file, encoding="utf-8") as f:
			data = json.load(f)
		titles = data.get("titles", [])
		if not isinstance(titles, list):
			return "INVALID (titles is not a list)", "title table: 'titles' field is not a list"
		return f"{len(titles)} titles (generated {data.get('generatedAt', 'unknown')})", None
	except (json.JSONDecodeError, IOError) as e:
		return f"INVALID ({e})", f"title table unreadable: {e}"


def _check_server_startup() -> tuple[str, str | None]:
	"""Try importing and counting registered tools. Returns (status, issue_or_none)."""
	try:
		from .server import mcp as server_instance
		count = len(server_instance._tool_manager._tools)
		return f"OK ({count} tools registered)", None
	except Exception as e:
		return f"FAILED ({e})", f"Server startup failed: {e}"


def cmd_doctor(args: argparse.Namespace) -> None:
	"""Health check - verify installation and configuration."""
	print("convex-docs doctor")
	print(f"{'=' * 40}")

	config = load_config()
	issues: list[str] = []

	py_ver = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
	print(f"  Python:       {py_ver}")
	print(f"  Platform:     {platform.system()} {platform.machine()}")
	print()

	print("  Deps:")
	for dep in ["mcp", "aiohttp", "beautifulsoup4", "markdownify", "platformdirs", "pydantic", "rapidfuzz"]:
		try:
			print(f"    {dep:22s} {pkg_version(dep)}")
		except Exception:
			print(f"    {dep:22s} NOT INSTALLED")
			issues.append(f"{dep} package not installed")
	print()

	print("  Config:")
	print(f"    base_url:            {config.base_url}")
	print(f"    topic cache ttl:     {config.topic_cache_ttl:.0f}s")
	print(f"    page cache ttl:      {config.page_cache_ttl:.0f}s")
	titles_status, titles_issue = _check_titles_file(config.titles_file)
	print(f"    titles:              {titles_status}")
	if titles_issue:
		issues.append(titles_issue)
	print()

	print("  Server:")
	server_status, server_issue = _check_server_startup()
	print(f"    {server_status}")
	if server_issue:
		issues.append(server_issue)
	print()

	if issues:
		print(f"  {len(issues)} issue(s) found:")
		for issue in issues:
			print(f"    - {issue}")
		sys.exit(1)
	else:
		print("  All checks passed.")


def cmd_fetch_titles(args: argparse.Namespace) -> None:
	"""Regenerate the title lookup table from the live site."""
	from .pages.harvest import TitleHarvester

	config = load_config()
	setup_logging(args.log_level or config.log_level)
	output = Path(args.output) if args.output else BUNDLED_TITLES_FILE

	harvester = TitleHarvester(
		args.base_url or config.base_url,
		concurrency=args.concurrency,
		batch_delay=args.delay,
		timeout=config.request_timeout,
		user_agent=config.user_agent,
	)
	try:
		document = asyncio.run(harvester.run(output))
	except Exception as e:
		print(f"Failed to fetch titles: {e}")
		sys.exit(1)

	print(f"Wrote {document.totalPages} titles to {output}")
	print()
	print("Sample titles:")
	for entry in document.titles[:10]:
		print(f"  {entry.path} -> \"{entry.title}\"")


def main() -> None:
	"""CLI entry point."""
	parser = argparse.ArgumentParser(
		prog="convex-docs",
		description="MCP server for the Convex documentation: list, fetch and search pages",
	)
	subparsers = parser.add_subparsers(dest="command")

	# serve
	serve_parser = subparsers.add_parser("serve", help="Run MCP server (stdio)")
	serve_parser.set_defaults(func=cmd_serve)

	# doctor
	doctor_parser = subparsers.add_parser("doctor", help="Health check")
	doctor_parser.set_defaults(func=cmd_doctor)

	# fetch-titles
	titles_parser = subparsers.add_parser("fetch-titles", help="Regenerate the page title table")
	titles_parser.add_argument("--output", type=str, default=None, help="Output JSON file (default: bundled table)")
	titles_parser.add_argument("--base-url", type=str, default=None, help="Documentation host")
	titles_parser.add_argument("--concurrency", type=int, default=10, help="Concurrent requests per batch")
	titles_parser.add_argument("--delay", type=float, default=0.1, help="Seconds between batches")
	titles_parser.add_argument("--log-level", type=str, default=None, help="Log level (default: INFO)")
	titles_parser.set_defaults(func=cmd_fetch_titles)

	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)


if __name__ == "__main__":
	main()
