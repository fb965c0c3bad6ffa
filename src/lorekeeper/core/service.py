# ABOUTME: Catalog service building item records for every page of a wiki category
# ABOUTME: Bounded-concurrency extraction that logs and skips failing pages instead of aborting

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from lorekeeper.config import get_config
from lorekeeper.extraction.base import ItemExtractor, ItemRecord
from lorekeeper.utils.logging import get_logger
from lorekeeper.utils.retry import transport_retry


class ItemCatalogService:
    """Service for turning a category listing into a list of item records."""

    def __init__(
        self,
        extractor: ItemExtractor,
        concurrency: int | None = None,
        retry_attempts: int | None = None,
        retry_wait: float = 0.5,
    ):
        config = get_config()
        self.extractor = extractor
        self.concurrency = concurrency or config.concurrency
        self.retry_attempts = retry_attempts or config.retry_attempts
        self.retry_wait = retry_wait
        self.logger = get_logger(__name__)

    async def extract_item(self, page_name: str) -> ItemRecord | None:
        """Extract one page, retrying transient transport errors. Redirect pages give None."""

        @transport_retry(max_attempts=self.retry_attempts, min_wait=self.retry_wait, max_wait=self.retry_wait * 8)
        async def _extract() -> ItemRecord | None:
            if await self.extractor.client.is_redirect(page_name):
                self.logger.info("Skipping redirect page", page=page_name)
                return None
            return await self.extractor.record(page_name)

        return await _extract()

    async def build(self, category: str) -> list[ItemRecord]:
        """Extract a record for every member of ``category``, in listing order."""
        members = await self.extractor.client.category_members(category)
        total = len(members)
        semaphore = asyncio.Semaphore(self.concurrency)

        self.logger.info("Starting catalog build", category=category, page_count=total, concurrency=self.concurrency)

        async def _run(index: int, title: str) -> ItemRecord | None:
            async with semaphore:
                try:
                    return await self.extract_item(title)
                except Exception as exc:
                    self.logger.error(
                        "Failed to extract item, skipping",
                        page=title,
                        error=str(exc),
                        error_type=type(exc).__name__,
                        current_index=index,
                        total=total,
                    )
                    return None

        results = await asyncio.gather(*(_run(index, member.title) for index, member in enumerate(members, start=1)))
        records = [record for record in results if record is not None]

        self.logger.info(
            "Catalog build completed", category=category, total=total, extracted=len(records), skipped=total - len(records)
        )
        return records

    def write(self, records: list[ItemRecord], path: Path | str) -> Path:
        """Write records as a JSON array, in the shape the search indexer reads."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_index_dict() for record in records]
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        self.logger.info("Wrote item records", path=str(path), record_count=len(records))
        return path
