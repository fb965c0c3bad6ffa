# ABOUTME: Wiki access layer: HTTP fetching, tiered caches, document parsing and listings
# ABOUTME: Pipeline Stage 1: wiki API -> cached JSON -> parsed documents

"""
Wiki Layer: Read-only access to MediaWiki/Fandom wikis

This layer handles:
- JSON API requests with memory and disk caching
- Raw markup retrieval and parsing into sections and infoboxes
- Image name to asset URL resolution
- Category and article listings

Data Flow: Wiki API -> UrlCache -> WikiDocument -> Extraction layer
"""

from .client import WikiClient, title_to_url
from .errors import PageNotFoundError, WikiError, WikiResponseError
from .models import Article, CategoryMember, Infobox, Section, WikiDocument

__all__ = [
    "Article",
    "CategoryMember",
    "Infobox",
    "PageNotFoundError",
    "Section",
    "WikiClient",
    "WikiDocument",
    "WikiError",
    "WikiResponseError",
    "title_to_url",
]
