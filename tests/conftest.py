# ABOUTME: Shared fixtures: wiki clients backed by temporary cache directories
# ABOUTME: Canned wikitext pages are seeded into the response cache so extractor tests never hit the network

from pathlib import Path

import httpx
import pytest

from lorekeeper.wiki import WikiClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://baldursgate.fandom.com"


def page_response(title: str, content: str, page_id: int = 1234) -> dict:
    """Legacy-format ``action=query&prop=revisions`` payload."""
    return {
        "batchcomplete": "",
        "query": {
            "pages": {
                str(page_id): {
                    "pageid": page_id,
                    "ns": 0,
                    "title": title,
                    "revisions": [{"contentformat": "text/x-wiki", "contentmodel": "wikitext", "*": content}],
                }
            }
        },
    }


def seed_page(client: WikiClient, page_name: str, content: str) -> None:
    """Put a page's query response in the client's in-memory URL cache."""
    client.url_cache.memory[client.page_query_url(page_name)] = page_response(page_name.replace("_", " "), content)


@pytest.fixture
def wiki_client(tmp_path):
    """Client with an isolated cache directory."""
    return WikiClient(base_url=BASE_URL, cache_dir=tmp_path / "cache", client=httpx.AsyncClient())


@pytest.fixture
def baldur_client(wiki_client):
    """Client with every fixture page of tests/fixtures/baldur already cached."""
    for path in sorted((FIXTURES_DIR / "baldur").glob("*.wiki")):
        seed_page(wiki_client, path.stem, path.read_text(encoding="utf-8"))
    return wiki_client
