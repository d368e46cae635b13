"""
Page rendering - HTML documentation pages to readable markdown.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag
from markdownify import markdownify as md

# Tried in order to locate the page body
CONTENT_SELECTORS = [
	"main",
	"article",
	"div[class*='content']",
	"div[id*='content']",
]

# Elements that never carry documentation text
REMOVE_SELECTORS = [
	"script",
	"style",
	"nav",
	"footer",
	"header",
	"aside",
	"button",
	"noscript",
	"svg",
]

LANGUAGE_CLASS = re.compile(r"language-(\w+)")


def _strip_chrome(root: Tag) -> None:
	for selector in REMOVE_SELECTORS:
		for element in root.select(selector):
			element.decompose()


def extract_main_content(html: str) -> str:
	"""Return the HTML of the main content area, with page chrome removed."""
	soup = BeautifulSoup(html, "html.parser")

	for selector in CONTENT_SELECTORS:
		content = soup.select_one(selector)
		if content:
			_strip_chrome(content)
			return str(content)

	if soup.head:
		soup.head.decompose()
	_strip_chrome(soup)
	return str(soup.body if soup.body else soup)


def extract_title(html: str, site_name: str = "Convex") -> str:
	"""Page title from <title> or the first <h1>, without the site suffix."""
	soup = BeautifulSoup(html, "html.parser")
	suffix = re.compile(rf"\s*[|–-]\s*{re.escape(site_name)}.*$", re.IGNORECASE)

	for tag in (soup.find("title"), soup.find("h1")):
		if tag is None:
			continue
		title = tag.get_text().strip()
		if title:
			return suffix.sub("", title)

	return "Untitled"


def _code_language(el: Tag) -> Optional[str]:
	"""Fence language from a <pre><code class="language-ts"> block."""
	code = el.find("code")
	classes = (code.get("class") if code else None) or el.get("class") or []
	for cls in classes:
		match = LANGUAGE_CLASS.match(cls)
		if match:
			return match.group(1)
	return None


def clean_markdown(markdown: str) -> str:
	"""Collapse blank-line runs and trailing whitespace."""
	markdown = re.sub(r"\n{3,}", "\n\n", markdown)
	lines = [line.rstrip() for line in markdown.split("\n")]
	return "\n".join(lines).strip()


def html_to_markdown(html: str) -> str:
	"""Convert a documentation page to markdown."""
	content = extract_main_content(html)
	markdown = md(
		content,
		heading_style="ATX",
		bullets="-",
		code_language_callback=_code_language,
	)
	return clean_markdown(markdown)


def create_snippet(text: str, max_length: int = 200) -> str:
	"""Plain-text preview of markdown, at most `max_length` characters."""
	snippet = re.sub(r"```[\s\S]*?```", "", text)
	snippet = re.sub(r"`[^`]+`", "", snippet)
	snippet = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", snippet)
	snippet = re.sub(r"#+\s*", "", snippet)
	snippet = re.sub(r"[*_~]+", "", snippet)
	snippet = re.sub(r"\s+", " ", snippet).strip()

	if len(snippet) > max_length:
		snippet = snippet[: max_length - 3] + "..."
	return snippet
