# ABOUTME: Async client for MediaWiki/Fandom read APIs with layered caching
# ABOUTME: Fetches markup, parses documents, resolves image URLs and walks category listings

import html
import re
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from lorekeeper.config import get_config
from lorekeeper.utils.logging import get_logger, log_api_call
from lorekeeper.wiki.cache import IMAGE_CACHE_FILENAME, ImageCache, UrlCache
from lorekeeper.wiki.errors import PageNotFoundError, WikiResponseError
from lorekeeper.wiki.models import (
    Article,
    ArticlesListResponse,
    CategoryMember,
    CategoryMembersResponse,
    ImageLookup,
    ImageNotFound,
    PageQueryResponse,
    ResolvedImage,
    WikiDocument,
)
from lorekeeper.wiki.parser import camel_case, parse_document

ModelT = TypeVar("ModelT", bound=BaseModel)

# Listing entries in these namespaces are not content pages
RESERVED_NAMESPACE_PATTERN = re.compile(r"^\s*(Category|Thread|User|Portal|Template):", re.IGNORECASE)


def title_to_url(title: str) -> str:
    """Convert a page title to its URL form ("Dragon's Breath" -> "Dragon%27s_Breath")."""
    return title.replace(" ", "_").replace("'", "%27")


def build_query(params: dict[str, Any]) -> str:
    """Encode query parameters with sorted keys so equal queries give equal cache keys."""
    return urlencode(sorted(params.items()))


class WikiClient:
    """Read-only client for one wiki, identified by its base URL.

    The client owns every cache it uses: the URL response cache, the image
    cache and the parsed document cache. Two clients for two wikis never
    share state.
    """

    def __init__(
        self,
        base_url: str | None = None,
        cache_dir: Path | str | None = None,
        client: httpx.AsyncClient | None = None,
        promote_disk_hits: bool | None = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.api_url = f"{self.base_url}/api.php"
        self.cache_dir = Path(cache_dir or config.cache_dir)

        self._owns_http_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": config.user_agent}
        )

        self.url_cache = UrlCache(
            self.cache_dir,
            promote_disk_hits=config.cache_promote_disk_hits if promote_disk_hits is None else promote_disk_hits,
        )
        self.image_cache = ImageCache(self.cache_dir / IMAGE_CACHE_FILENAME)
        self.documents: dict[str, WikiDocument] = {}
        self.logger = get_logger(__name__)

    async def __aenter__(self) -> "WikiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    @log_api_call("wiki")
    async def _fetch_json(self, url: str) -> Any:
        response = await self.http_client.get(url)
        response.raise_for_status()
        return response.json()

    async def read_json_url(self, url: str) -> Any:
        """Read JSON at ``url`` through the memory and disk caches."""
        return await self.url_cache.read_json(url, self._fetch_json)

    @staticmethod
    def _validate(model: type[ModelT], data: Any, url: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise WikiResponseError(url, str(e)) from e

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def page_query_url(self, page_name: str) -> str:
        query = build_query(
            {
                "action": "query",
                "prop": "revisions",
                "rvprop": "content",
                "format": "json",
                "titles": page_name,
            }
        )
        return f"{self.api_url}?{query}"

    def category_members_url(self, category_name: str) -> str:
        query = build_query(
            {
                "action": "query",
                "cmlimit": "max",
                "cmtitle": f"Category:{category_name}",
                "format": "json",
                "list": "categorymembers",
            }
        )
        return f"{self.api_url}?{query}"

    def articles_url(self, category_name: str, limit: int = 10000, **options: Any) -> str:
        query = build_query({"limit": limit, "category": category_name, **options})
        return f"{self.base_url}/api/v1/Articles/List?{query}"

    def file_path_url(self, image_name: str) -> str:
        return f"{self.base_url}/wiki/Special:FilePath/{image_name}"

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def markup(self, page_name: str) -> str:
        """Get the raw wikitext of a page."""
        url = self.page_query_url(page_name)
        response = self._validate(PageQueryResponse, await self.read_json_url(url), url)
        page = response.first_page()
        if not page.revisions:
            raise PageNotFoundError(page_name)
        return page.revisions[0].content

    async def doc(self, page_name: str) -> WikiDocument:
        """Get the parsed document of a page, parsed at most once per client."""
        if page_name in self.documents:
            return self.documents[page_name]

        document = parse_document(await self.markup(page_name))
        self.documents[page_name] = document
        return document

    async def json(self, page_name: str) -> dict[str, Any]:
        """Return the parsed document as plain data."""
        document = await self.doc(page_name)
        return document.model_dump(mode="json")

    async def infobox(self, page_name: str) -> dict[str, str] | None:
        """Return the first infobox of the page with camelCase keys, or None when there is none."""
        document = await self.doc(page_name)
        for section in document.sections:
            if section.infoboxes:
                fields = section.infoboxes[0].fields
                return {camel_case(key): value for key, value in fields.items()}
        return None

    async def is_stub(self, page_name: str) -> bool:
        markup = await self.markup(page_name)
        return "{{stub}}" in markup.lower()

    async def is_redirect(self, page_name: str) -> bool:
        markup = await self.markup(page_name)
        return "#redirect" in markup.lower()

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    async def lookup_image(self, image_name: str) -> ImageLookup:
        """Resolve an image name to the URL of the actual file.

        ``Special:FilePath`` redirects to the asset, so the final URL after
        redirects is the answer. Failed lookups are not cached.
        """
        name = title_to_url(html.unescape(image_name).strip())
        if not name:
            return ImageNotFound(name=name, reason="empty image name")

        cached = self.image_cache.get(self.base_url, name)
        if cached:
            return ResolvedImage(name=name, url=cached)

        special_url = self.file_path_url(name)
        try:
            response = await self.http_client.get(special_url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.warning("Image lookup failed", image=name, url=special_url, error=str(e))
            return ImageNotFound(name=name, reason=str(e))

        url = str(response.url)
        self.image_cache.set(self.base_url, name, url)
        self.logger.debug("Resolved image", image=name, resolved_url=url)
        return ResolvedImage(name=name, url=url)

    async def image_url(self, image_name: str) -> str | None:
        """Best-effort image URL: a missing picture must never block extraction."""
        lookup = await self.lookup_image(image_name)
        if isinstance(lookup, ResolvedImage):
            return lookup.url
        return None

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def category_members(self, category_name: str) -> list[CategoryMember]:
        """List the content pages of a category.

        Only the first ``cmlimit=max`` batch is read; continuation is not followed.
        """
        url = self.category_members_url(category_name)

        response = self._validate(CategoryMembersResponse, await self.read_json_url(url), url)
        return [
            CategoryMember(title=entry.title, url=f"{self.base_url}/{title_to_url(entry.title)}")
            for entry in response.query.categorymembers
            if not RESERVED_NAMESPACE_PATTERN.match(entry.title)
        ]

    async def articles(self, category_name: str, limit: int = 10000, **options: Any) -> list[Article]:
        """List the articles of a category through the Fandom Articles API, sorted by title."""
        url = self.articles_url(category_name, limit, **options)

        response = self._validate(ArticlesListResponse, await self.read_json_url(url), url)
        # The first item is the category page itself
        articles = [
            Article(id=item.id, title=item.title, url=f"{self.base_url}{item.url}") for item in response.items[1:]
        ]
        return sorted(articles, key=lambda article: article.title)
