# ABOUTME: Item attribute extraction from parsed wiki pages
# ABOUTME: Pipeline Stage 2: WikiDocument + infobox -> ItemRecord

"""
Extraction Layer: Turn wiki pages into item records

This layer handles:
- Price, description, type and magic heuristics over infoboxes and text
- Title formatting, slugs and pseudo-coordinates
- Per-game extractors applying indexing defaults

Data Flow: Wiki layer documents -> Field extractors -> ItemRecord
"""

from .base import Coordinates, ItemExtractor, ItemRecord
from .baldur import BaldurItemExtractor

__all__ = [
    "BaldurItemExtractor",
    "Coordinates",
    "ItemExtractor",
    "ItemRecord",
]
