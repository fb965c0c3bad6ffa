# ABOUTME: Item extractor for the Baldur's Gate wiki
# ABOUTME: Binds the pure field extractors to a WikiClient and applies the indexing defaults

from urllib.parse import unquote

from lorekeeper.extraction.base import ItemRecord
from lorekeeper.extraction.fields import (
    TYPE_FIELDS,
    TYPE_SENTINEL,
    classify_type,
    clean_description,
    coordinates,
    description_source,
    detect_magic,
    first_field,
    format_title,
    parse_price,
    slugify,
)
from lorekeeper.utils.logging import get_logger, log_extraction_step
from lorekeeper.wiki import WikiClient, title_to_url


class BaldurItemExtractor:
    """Builds item records from Baldur's Gate wiki pages.

    Every field falls back to a neutral value (0, "", GARBAGE, False, None)
    when the page does not carry it, so a record can always be indexed.
    """

    game = "Baldur's Gate"
    game_slug = "baldur"

    def __init__(self, client: WikiClient, description_sentences: int | None = None):
        self.client = client
        self.description_sentences = description_sentences
        self.logger = get_logger(__name__)

    async def price(self, page_name: str) -> int:
        price = parse_price(await self.client.infobox(page_name))
        return price if price is not None else 0

    async def description(self, page_name: str) -> str:
        document = await self.client.doc(page_name)
        source = description_source(document)
        description = clean_description(source, self.description_sentences) if source else None
        return description if description is not None else ""

    async def type(self, page_name: str) -> str:
        raw = first_field(await self.client.infobox(page_name), TYPE_FIELDS)
        category = classify_type(raw)
        if category is None:
            self.logger.debug("Unrecognized item type", page=page_name, raw_type=raw)
            return TYPE_SENTINEL
        return category

    async def is_magical(self, page_name: str) -> bool:
        infobox = await self.client.infobox(page_name)
        markup = await self.client.markup(page_name)
        return detect_magic(infobox, markup) is True

    async def picture(self, page_name: str) -> str | None:
        infobox = await self.client.infobox(page_name)
        image = first_field(infobox, ("image",))
        if image is None:
            return None
        return await self.client.image_url(image)

    @log_extraction_step("item_record")
    async def record(self, page_name: str) -> ItemRecord:
        """Build the full item record of a page."""
        page_title = unquote(page_name).replace("_", " ")
        title = format_title(page_title)
        slug = slugify(title)

        return ItemRecord(
            title=title,
            slug=slug,
            url=f"{self.client.base_url}/{title_to_url(page_title)}",
            game=self.game,
            game_slug=self.game_slug,
            unique_slug=f"{self.game_slug}-{slug}",
            description=await self.description(page_name),
            price=await self.price(page_name),
            type=await self.type(page_name),
            is_magical=await self.is_magical(page_name),
            picture=await self.picture(page_name),
            geoloc=coordinates(title),
        )
