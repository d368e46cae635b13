"""Page pipeline: fetch-and-cache by URL, HTML rendering, title harvesting."""
