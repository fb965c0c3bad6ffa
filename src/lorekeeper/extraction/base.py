# ABOUTME: Item record model and the protocol implemented by per-game item extractors
# ABOUTME: Records are plain JSON-serializable objects consumed by the search indexer

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lorekeeper.wiki import WikiClient


class Coordinates(BaseModel):
    """Pseudo-geographic placement used to scatter items on a map widget."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(gt=-90, lt=90)
    lng: float = Field(gt=-90, lt=90)


class ItemRecord(BaseModel):
    """One searchable item, recomputed from the wiki on demand."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = Field(..., description="Display title, without disambiguation suffix")
    slug: str = Field(..., description="URL-safe version of the title")
    url: str | None = Field(None, description="Wiki page URL")
    game: str = Field(..., description="Name of the game the item belongs to")
    game_slug: str = Field(..., description="URL-safe game identifier")
    unique_slug: str = Field(..., description="Identifier unique across games")
    description: str = Field("", description="Lead or in-game description text")
    price: int = Field(0, ge=0, description="Store price, 0 when unknown or not for sale")
    type: str = Field(..., description="Item category, GARBAGE when unknown")
    is_magical: bool = Field(False, description="Whether the item is enchanted")
    picture: str | None = Field(None, description="Resolved image URL")
    geoloc: Coordinates = Field(..., alias="_geoloc")

    def to_index_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ItemExtractor(Protocol):
    """Protocol for building item records from the pages of one wiki."""

    client: WikiClient

    async def record(self, page_name: str) -> ItemRecord:
        """Build the item record of a page.

        Raises:
            httpx.HTTPError: If the page markup cannot be fetched
            WikiError: If the wiki answers with an unexpected payload
        """
        ...
