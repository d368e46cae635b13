"""
Static Fallback Catalog - the bundled topic tree served when the live
sitemap cannot be used.
"""

import re
from typing import Iterable, Optional

from ..models import Topic


def _t(title: str, path: str, description: str, children: Optional[list[Topic]] = None) -> Topic:
	return Topic(title=title, path=path, description=description, children=children)


STATIC_CATALOG: list[Topic] = [
	_t("Get Started", "get-started", "Introduction and getting started with Convex", [
		_t("Welcome", "get-started", "Introduction to Convex"),
		_t("Tutorial", "tutorial", "Step-by-step Convex tutorial"),
		_t("Quickstarts", "quickstarts", "Quick start guides for various frameworks", [
			_t("React", "quickstarts/react", "Quickstart with React"),
			_t("Next.js", "quickstarts/nextjs", "Quickstart with Next.js"),
			_t("React Native", "quickstarts/react-native", "Quickstart with React Native"),
			_t("Vue", "quickstarts/vue", "Quickstart with Vue"),
			_t("Svelte", "quickstarts/svelte", "Quickstart with Svelte"),
			_t("Python", "quickstarts/python", "Quickstart with Python"),
			_t("Rust", "quickstarts/rust", "Quickstart with Rust"),
		]),
	]),
	_t("Functions", "functions", "Convex serverless functions", [
		_t("Overview", "functions", "Introduction to Convex functions"),
		_t("Query Functions", "functions/query-functions", "Read data with query functions"),
		_t("Mutation Functions", "functions/mutation-functions", "Write data with mutation functions"),
		_t("Action Functions", "functions/actions", "Side effects with action functions"),
		_t("Internal Functions", "functions/internal-functions", "Functions only callable from other functions"),
		_t("HTTP Actions", "functions/http-actions", "HTTP endpoint handlers"),
		_t("Bundling", "functions/bundling", "How function bundling works"),
		_t("Error Handling", "functions/error-handling", "Handling errors in functions"),
	]),
	_t("Database", "database", "Convex database and data modeling", [
		_t("Overview", "database", "Introduction to Convex database"),
		_t("Reading Data", "database/reading-data", "Querying data from the database"),
		_t("Writing Data", "database/writing-data", "Inserting and modifying data"),
		_t("Document IDs", "database/document-ids", "Working with document IDs"),
		_t("Tables", "database/tables", "Database tables and collections"),
		_t("Schemas", "database/schemas", "Defining database schemas"),
		_t("Indexes", "database/indexes", "Database indexes for efficient queries"),
		_t("Pagination", "database/pagination", "Paginating query results"),
		_t("TypeScript", "database/typescript", "TypeScript support for database"),
	]),
	_t("File Storage", "file-storage", "Storing and serving files", [
		_t("Overview", "file-storage", "Introduction to file storage"),
		_t("Upload Files", "file-storage/upload-files", "Uploading files to Convex"),
		_t("Serve Files", "file-storage/serve-files", "Serving files from Convex"),
		_t("Delete Files", "file-storage/delete-files", "Deleting stored files"),
	]),
	_t("Authentication", "auth", "User authentication and authorization", [
		_t("Overview", "auth", "Introduction to authentication"),
		_t("Clerk", "auth/clerk", "Authentication with Clerk"),
		_t("Auth0", "auth/auth0", "Authentication with Auth0"),
		_t("Custom Auth", "auth/custom-auth", "Custom authentication setup"),
		_t("Functions Auth", "auth/functions-auth", "Authentication in functions"),
	]),
	_t("Scheduling", "scheduling", "Scheduled and cron jobs", [
		_t("Overview", "scheduling", "Introduction to scheduling"),
		_t("Scheduled Functions", "scheduling/scheduled-functions", "Running functions on a schedule"),
		_t("Cron Jobs", "scheduling/cron-jobs", "Setting up cron jobs"),
	]),
	_t("Search", "search", "Full-text and vector search", [
		_t("Overview", "search", "Introduction to search"),
		_t("Full-Text Search", "search/full-text-search", "Full-text search implementation"),
		_t("Vector Search", "search/vector-search", "Vector/semantic search implementation"),
	]),
	_t("AI", "ai", "AI and LLM integration", [
		_t("Overview", "ai", "AI features in Convex"),
		_t("Using Cursor", "ai/using-cursor", "Convex AI rules for Cursor IDE"),
		_t("Using Windsurf", "ai/using-windsurf", "Convex AI rules for Windsurf IDE"),
		_t("Using GitHub Copilot", "ai/using-github-copilot", "Convex instructions for GitHub Copilot"),
		_t("Convex MCP Server", "ai/convex-mcp-server", "MCP server for AI coding agents"),
	]),
	_t("AI Agents", "agents", "Building AI agents with Convex", [
		_t("Overview", "agents", "Building AI agents with Convex"),
		_t("Getting Started", "agents/getting-started", "Build your first AI agent"),
		_t("Tools", "agents/tools", "Agent tools and function calling"),
		_t("Threads", "agents/threads", "Managing conversation threads"),
		_t("Messages", "agents/messages", "Working with messages in threads"),
		_t("Human Agents", "agents/human-agents", "Human-in-the-loop agents"),
		_t("Context", "agents/context", "Conversation context management"),
		_t("Workflows", "agents/workflows", "Multi-step agent workflows"),
		_t("RAG", "agents/rag", "Retrieval-augmented generation"),
		_t("Files", "agents/files", "File handling in agent conversations"),
		_t("Debugging", "agents/debugging", "Debugging AI agents"),
		_t("Playground", "agents/playground", "Agent playground for testing"),
		_t("Usage Tracking", "agents/usage-tracking", "Track agent usage and billing"),
		_t("Rate Limiting", "agents/rate-limiting", "Rate limiting agent interactions"),
	]),
	_t("Client Libraries", "client", "Client-side libraries and SDKs", [
		_t("React", "client/react", "React client library"),
		_t("React Native", "client/react-native", "React Native client"),
		_t("JavaScript", "client/javascript", "Vanilla JavaScript client"),
		_t("Python", "client/python", "Python client library"),
	]),
	_t("Production", "production", "Deployment and production considerations", [
		_t("Overview", "production", "Production deployment"),
		_t("Hosting", "production/hosting", "Hosting your Convex app"),
		_t("Environment Variables", "production/environment-variables", "Managing environment variables"),
		_t("Logging", "production/logging", "Application logging"),
		_t("Error Handling", "production/error-handling", "Production error handling"),
		_t("Debugging", "production/debugging", "Debugging production issues"),
		_t("Best Practices", "production/best-practices", "Production best practices"),
	]),
	_t("CLI", "cli", "Convex CLI reference", [
		_t("Overview", "cli", "Convex CLI introduction"),
		_t("Agent Mode", "cli/agent-mode", "CLI agent mode for background AI agents"),
	]),
	_t("API Reference", "api", "Complete API reference", [
		_t("Overview", "api", "API reference overview"),
	]),
]


def normalize_section(section: str) -> str:
	"""'File Storage' / 'file - storage' -> 'file-storage'."""
	return re.sub(r"[\s-]+", "-", section.strip().lower())


def matches_section(topic: Topic, section: str) -> bool:
	normalized = normalize_section(section)
	return (
		normalized in topic.path.lower()
		or normalized in re.sub(r"\s+", "-", topic.title.lower())
	)


def filter_by_section(topics: Iterable[Topic], section: str) -> list[Topic]:
	"""Top-level topics whose path or hyphenated title contains the section."""
	return [topic for topic in topics if matches_section(topic, section)]


def find_topic(path: str, topics: Optional[Iterable[Topic]] = None) -> Optional[Topic]:
	"""Depth-first lookup by path (leading/trailing slashes ignored)."""
	normalized = path.strip("/")
	for topic in STATIC_CATALOG if topics is None else topics:
		if topic.path == normalized:
			return topic
		if topic.children:
			found = find_topic(normalized, topic.children)
			if found:
				return found
	return None
