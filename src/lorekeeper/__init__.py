"""Lorekeeper: searchable game item records extracted from MediaWiki wikis."""

__version__ = "0.1.0"
