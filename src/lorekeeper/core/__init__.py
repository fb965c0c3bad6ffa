# ABOUTME: Orchestration layer
# ABOUTME: Pipeline Stage 3: category listing -> item records -> JSON file for the indexer

"""
Core Layer: Workflow orchestration

This layer handles:
- Walking category listings
- Bounded-concurrency record extraction with skip-on-failure
- Writing the record file consumed by the search indexer

Data Flow: Wiki listing -> Extraction layer -> records JSON
"""

from .service import ItemCatalogService

__all__ = ["ItemCatalogService"]
