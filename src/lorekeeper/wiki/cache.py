# ABOUTME: Two-tier caches for wiki API responses and resolved image URLs
# ABOUTME: Memory is checked first, then disk, then the network; network results populate both tiers

import hashlib
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from lorekeeper.utils.logging import get_logger

logger = get_logger(__name__)

IMAGE_CACHE_FILENAME = "images.json"


def url_to_filepath(url: str, extension: str = "json") -> Path:
    """Map a URL to a stable relative path: ``<host>/<sha256(url)>.<extension>``."""
    host = urlsplit(url).netloc or "local"
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return Path(host.replace(":", "_")) / f"{digest}.{extension}"


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


class UrlCache:
    """Cache of decoded JSON bodies keyed by exact request URL.

    Entries never expire. A response read back from disk is only copied into
    memory when ``promote_disk_hits`` is set.
    """

    def __init__(self, cache_dir: Path | str, promote_disk_hits: bool = False):
        self.cache_dir = Path(cache_dir)
        self.promote_disk_hits = promote_disk_hits
        self.memory: dict[str, Any] = {}

    def path_for(self, url: str) -> Path:
        return self.cache_dir / url_to_filepath(url)

    async def read_json(self, url: str, fetch: Callable[[str], Awaitable[Any]]) -> Any:
        """Return the JSON body for ``url``, calling ``fetch`` only on a full miss."""
        if url in self.memory:
            return self.memory[url]

        path = self.path_for(url)
        if path.is_file():
            logger.debug("Disk cache hit", url=url, path=str(path))
            data = json.loads(path.read_text(encoding="utf-8"))
            if self.promote_disk_hits:
                self.memory[url] = data
            return data

        data = await fetch(url)
        _write_json(path, data)
        self.memory[url] = data
        return data


class ImageCache:
    """Resolved image URLs keyed by wiki base URL, then normalized image name.

    The whole mapping lives in one JSON file, loaded on first use and
    rewritten on every new entry. Several clients may share the file, so a
    write merges with what is on disk. An unreadable file counts as empty and
    is rebuilt from the network.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.entries: dict[str, dict[str, str]] = {}
        self._loaded = False

    def _read_file(self) -> dict[str, dict[str, str]]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable image cache, starting empty", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected image cache content, starting empty", path=str(self.path))
            return {}
        return data

    def _load(self) -> None:
        if self._loaded:
            return
        self.entries = self._read_file()
        self._loaded = True

    def get(self, base_url: str, name: str) -> str | None:
        self._load()
        return self.entries.get(base_url, {}).get(name)

    def set(self, base_url: str, name: str, url: str) -> None:
        self._load()
        merged = self._read_file()
        for known_base_url, names in self.entries.items():
            merged.setdefault(known_base_url, {}).update(names)
        merged.setdefault(base_url, {})[name] = url
        self.entries = merged
        _write_json(self.path, self.entries)
