# ABOUTME: Tests for the Baldur's Gate item extractor against canned wiki pages
# ABOUTME: Pages come from tests/fixtures/baldur; image lookups are served from the image cache or httpx_mock

import pytest
from conftest import BASE_URL, seed_page

from lorekeeper.extraction import BaldurItemExtractor, ItemRecord
from lorekeeper.extraction.fields import coordinates
from lorekeeper.wiki import PageNotFoundError


@pytest.fixture
def extractor(baldur_client):
    return BaldurItemExtractor(baldur_client)


class TestPrice:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "page,expected",
        [
            ("Carsomyr", 20000),
            ("Algernon_Cloak", 1750),
            ("Angurvadal", 7750),
            ("Acid_Arrow", 10),
            ("Acorns", 1),
        ],
    )
    async def test_price(self, extractor, page, expected):
        assert await extractor.price(page) == expected

    @pytest.mark.asyncio
    async def test_not_for_sale_is_zero(self, extractor):
        assert await extractor.price("Abyssal_Blade") == 0

    @pytest.mark.asyncio
    async def test_page_without_infobox_is_zero(self, extractor):
        assert await extractor.price("Sword_Coast_Items") == 0


class TestType:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "page,expected",
        [
            ("Carsomyr", "Two-Handed Sword"),
            ("Abyssal_Blade", "Short Sword"),
            ("Angurvadal", "Long Sword"),
            ("Celestial_Fury", "Curved Sword"),
            ("Dwarven_Thrower", "Bludgeoning Weapon"),
            ("Acid_Arrow", "Ammunition"),
            ("Bracers_of_Defense_AC_3", "Glove"),
            ("Armor_of_Faith", "Light Armor"),
            ("Axe_of_the_Unyielding", "Axe"),
            ("Headband_of_Focus", "Helmet"),
            ("Algernon_Cloak", "Cloak"),
        ],
    )
    async def test_type(self, extractor, page, expected):
        assert await extractor.type(page) == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", ["Acorns", "Elminster_Ecologies", "Sword_Coast_Items"])
    async def test_unknown_type_is_sentinel(self, extractor, page):
        assert await extractor.type(page) == "GARBAGE"


class TestIsMagical:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "page",
        ["Carsomyr", "Angurvadal", "Bracers_of_Defense_AC_3", "Headband_of_Focus", "Abyssal_Blade"],
    )
    async def test_magical(self, extractor, page):
        assert await extractor.is_magical(page) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", ["Acorns", "Elminster_Ecologies", "Algernon_Cloak", "Sword_Coast_Items"])
    async def test_not_magical(self, extractor, page):
        assert await extractor.is_magical(page) is False


class TestDescription:
    @pytest.mark.asyncio
    async def test_description_section_cut_before_statistics(self, extractor):
        description = await extractor.description("Carsomyr")

        assert description.startswith("Carsomyr is a weapon of legend")
        assert description.endswith("quenched in the blood of a fallen demon.")
        assert "STATISTICS" not in description

    @pytest.mark.asyncio
    async def test_description_spanning_sentences(self, extractor):
        description = await extractor.description("Bracers_of_Defense_AC_3")

        assert description.startswith("Grinning Glen, the Knight of the Sands")
        assert description.endswith("his own folly.")

    @pytest.mark.asyncio
    async def test_lead_used_when_no_description_section(self, extractor):
        description = await extractor.description("Axe_of_the_Unyielding")

        assert description.startswith("This axe was last seen")
        assert description.endswith("the Marching Mountains.")

    @pytest.mark.asyncio
    async def test_list_page_lead(self, extractor):
        assert await extractor.description("Sword_Coast_Items") == "This page lists the items found along the Sword Coast."

    @pytest.mark.asyncio
    async def test_sentence_limit(self, baldur_client):
        extractor = BaldurItemExtractor(baldur_client, description_sentences=1)

        assert await extractor.description("Acorns") == "Acorns are the fruit of the mighty oak."

    @pytest.mark.asyncio
    async def test_empty_page_has_empty_description(self, baldur_client):
        seed_page(baldur_client, "Blank", "")

        assert await BaldurItemExtractor(baldur_client).description("Blank") == ""


class TestPicture:
    @pytest.mark.asyncio
    async def test_picture_resolved_through_image_cache(self, extractor, baldur_client):
        baldur_client.image_cache.set(BASE_URL, "Carsomyr_+5.png", "https://static.example/Carsomyr.png")

        assert await extractor.picture("Carsomyr") == "https://static.example/Carsomyr.png"

    @pytest.mark.asyncio
    async def test_apostrophes_are_url_encoded(self, extractor, httpx_mock):
        httpx_mock.add_response(url=f"{BASE_URL}/wiki/Special:FilePath/Algernon%27s_Cloak.png")

        assert await extractor.picture("Algernon_Cloak") == f"{BASE_URL}/wiki/Special:FilePath/Algernon%27s_Cloak.png"

    @pytest.mark.asyncio
    async def test_failed_lookup_is_none(self, extractor, httpx_mock):
        httpx_mock.add_response(status_code=404)

        assert await extractor.picture("Acorns") is None

    @pytest.mark.asyncio
    async def test_no_infobox_no_picture(self, extractor, httpx_mock):
        assert await extractor.picture("Sword_Coast_Items") is None
        assert httpx_mock.get_requests() == []


class TestRecord:
    @pytest.mark.asyncio
    async def test_full_record(self, extractor, baldur_client):
        baldur_client.image_cache.set(BASE_URL, "Carsomyr_+5.png", "https://static.example/Carsomyr.png")

        record = await extractor.record("Carsomyr")

        assert isinstance(record, ItemRecord)
        assert record.title == "Carsomyr"
        assert record.slug == "carsomyr"
        assert record.unique_slug == "baldur-carsomyr"
        assert record.game == "Baldur's Gate"
        assert record.game_slug == "baldur"
        assert record.url == f"{BASE_URL}/Carsomyr"
        assert record.price == 20000
        assert record.type == "Two-Handed Sword"
        assert record.is_magical is True
        assert record.picture == "https://static.example/Carsomyr.png"
        assert record.geoloc == coordinates("Carsomyr")

    @pytest.mark.asyncio
    async def test_index_dict_uses_camel_case_keys(self, extractor, baldur_client):
        baldur_client.image_cache.set(BASE_URL, "Acorns.png", "https://static.example/Acorns.png")

        data = (await extractor.record("Acorns")).to_index_dict()

        assert set(data) == {
            "title",
            "slug",
            "url",
            "game",
            "gameSlug",
            "uniqueSlug",
            "description",
            "price",
            "type",
            "isMagical",
            "picture",
            "_geoloc",
        }
        assert data["type"] == "GARBAGE"
        assert data["isMagical"] is False
        assert set(data["_geoloc"]) == {"lat", "lng"}

    @pytest.mark.asyncio
    async def test_defaults_for_page_without_infobox(self, extractor):
        record = await extractor.record("Sword_Coast_Items")

        assert record.price == 0
        assert record.type == "GARBAGE"
        assert record.is_magical is False
        assert record.picture is None
        assert record.title == "Sword Coast Items"
        assert record.url == f"{BASE_URL}/Sword_Coast_Items"

    @pytest.mark.asyncio
    async def test_disambiguation_suffix_dropped_from_title(self, baldur_client):
        seed_page(baldur_client, "Dragon's Breath (item)", "A potion of legendary strength.")
        extractor = BaldurItemExtractor(baldur_client)

        record = await extractor.record("Dragon's Breath (item)")

        assert record.title == "Dragon's Breath"
        assert record.slug == "dragon-s-breath"
        assert record.url == f"{BASE_URL}/Dragon%27s_Breath_(item)"

    @pytest.mark.asyncio
    async def test_missing_page_propagates(self, extractor, baldur_client):
        baldur_client.url_cache.memory[baldur_client.page_query_url("Nope")] = {
            "query": {"pages": {"-1": {"title": "Nope", "missing": ""}}}
        }

        with pytest.raises(PageNotFoundError):
            await extractor.record("Nope")
