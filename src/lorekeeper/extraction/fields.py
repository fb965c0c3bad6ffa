# ABOUTME: Pure field extractors turning infoboxes, documents and titles into item attributes
# ABOUTME: Each heuristic returns None when it finds nothing; callers choose the default

import hashlib
import re
from collections.abc import Iterable, Mapping

from lorekeeper.extraction.base import Coordinates
from lorekeeper.wiki.models import WikiDocument
from lorekeeper.wiki.parser import display_text

PRICE_FIELDS = ("value", "price", "cost", "basePrice", "sellPrice")
TYPE_FIELDS = ("type", "itemType", "category")
MAGIC_FLAG_FIELDS = ("enchantment", "enchanted", "magical", "magic")

TYPE_SENTINEL = "GARBAGE"

NOT_FOR_SALE_MARKERS = ("n/a", "not for sale", "cannot be sold", "can't be sold", "unsellable", "priceless")
NEGATIVE_FLAGS = {"no", "none", "0", "+0", "false", "n/a", "non-magical", "nonmagical", "mundane"}

# In-game descriptions are followed by a statistics block
DESCRIPTION_DELIMITERS = ("STATISTICS:", "Equipped abilities:", "Combat abilities:")

_PRICE_PATTERN = re.compile(r"\d{1,3}(?:,\d{3})+|\d+")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_MAGIC_WORDS = re.compile(r"__[A-Z]+__")
_ENCHANTMENT_BONUS = re.compile(r"\+\s?\d")
_MAGIC_CATEGORY = re.compile(r"\[\[\s*Category\s*:\s*(?:Magic|Magical|Enchanted)\b", re.IGNORECASE)
_DISAMBIGUATION_SUFFIX = re.compile(r" \([^()]*\)$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

# Observed wiki item types, grouped under the categories shown in search facets
ITEM_TYPES: dict[str, tuple[str, ...]] = {
    "Ammunition": ("ammunition", "arrow", "bolt", "bullet", "sling bullet"),
    "Two-Handed Sword": ("two-handed sword", "two handed sword", "2-handed sword", "greatsword", "great sword"),
    "Long Sword": ("long sword", "longsword", "bastard sword"),
    "Short Sword": ("short sword", "shortsword"),
    "Curved Sword": ("curved sword", "katana", "scimitar", "wakizashi", "ninja-to", "ninjato"),
    "Axe": ("axe", "battle axe", "battleaxe", "hand axe", "throwing axe"),
    "Bludgeoning Weapon": (
        "bludgeoning weapon",
        "war hammer",
        "warhammer",
        "hammer",
        "mace",
        "club",
        "flail",
        "morning star",
        "morningstar",
    ),
    "Dagger": ("dagger", "throwing dagger"),
    "Dart": ("dart",),
    "Spear": ("spear",),
    "Halberd": ("halberd",),
    "Quarterstaff": ("quarterstaff", "staff"),
    "Bow": ("bow", "long bow", "longbow", "short bow", "shortbow", "composite long bow", "composite longbow"),
    "Crossbow": ("crossbow", "light crossbow", "heavy crossbow"),
    "Sling": ("sling",),
    "Light Armor": ("light armor", "leather armor", "studded leather armor", "hide armor", "padded armor"),
    "Medium Armor": (
        "medium armor",
        "chain mail",
        "chainmail",
        "elven chain mail",
        "ring mail",
        "ringmail",
        "scale mail",
        "splint mail",
    ),
    "Heavy Armor": ("heavy armor", "plate mail", "full plate", "full plate mail", "banded mail"),
    "Robe": ("robe",),
    "Shield": ("shield", "buckler", "small shield", "medium shield", "large shield", "tower shield"),
    "Helmet": ("helmet", "helm", "headband", "hat", "circlet"),
    "Glove": ("glove", "gloves", "gauntlet", "gauntlets", "bracer", "bracers"),
    "Belt": ("belt", "girdle"),
    "Boots": ("boots", "boot"),
    "Cloak": ("cloak", "cape", "mantle"),
    "Ring": ("ring",),
    "Amulet": ("amulet", "necklace", "periapt", "medallion", "pendant"),
    "Potion": ("potion", "oil", "elixir"),
    "Scroll": ("scroll",),
    "Wand": ("wand", "rod"),
    "Gem": ("gem", "gemstone", "jewel"),
}

_TYPE_LOOKUP = {alias: category for category, aliases in ITEM_TYPES.items() for alias in aliases}
_ALIASES_LONGEST_FIRST = sorted(_TYPE_LOOKUP, key=len, reverse=True)


def first_field(infobox: Mapping[str, str] | None, keys: Iterable[str]) -> str | None:
    """Value of the first listed key that is present with a non-blank value."""
    if not infobox:
        return None
    for key in keys:
        value = infobox.get(key)
        if value is not None and value.strip():
            return value
    return None


def parse_price(infobox: Mapping[str, str] | None) -> int | None:
    """Store price from the infobox monetary field ("20,000 gp" -> 20000)."""
    raw = first_field(infobox, PRICE_FIELDS)
    if raw is None:
        return None

    text = raw.strip().lower()
    if text in {"-", "none", "no"} or any(marker in text for marker in NOT_FOR_SALE_MARKERS):
        return None

    match = _PRICE_PATTERN.search(text)
    if not match:
        return None
    return int(match.group(0).replace(",", ""))


def description_source(document: WikiDocument) -> str | None:
    """Raw wikitext holding the item description.

    A "Description" section wins, then any section whose heading mentions a
    description, then the lead section.
    """
    section = document.section("Description")
    if section is None:
        section = next(
            (s for s in document.sections if s.title and "description" in s.title.lower()),
            None,
        )
    if section is not None and section.text.strip():
        return section.text
    lead = document.lead
    return lead.text if lead is not None else None


def clean_description(
    markup: str,
    max_sentences: int | None = None,
    delimiters: Iterable[str] = DESCRIPTION_DELIMITERS,
) -> str | None:
    """Plain description text, cut at the first delimiter and optionally at N sentences."""
    text = display_text(_MAGIC_WORDS.sub("", markup))

    lowered = text.lower()
    cuts = [index for index in (lowered.find(marker.lower()) for marker in delimiters) if index >= 0]
    if cuts:
        text = text[: min(cuts)]
    text = text.strip()

    if max_sentences is not None:
        text = " ".join(_SENTENCE_BOUNDARY.split(text)[:max_sentences])

    return text or None


def classify_type(raw: str | None) -> str | None:
    """Map a raw infobox type to a search facet category."""
    if not raw:
        return None
    normalized = " ".join(raw.lower().split())

    if normalized in _TYPE_LOOKUP:
        return _TYPE_LOOKUP[normalized]
    if normalized.endswith("s") and normalized[:-1] in _TYPE_LOOKUP:
        return _TYPE_LOOKUP[normalized[:-1]]

    for alias in _ALIASES_LONGEST_FIRST:
        if re.search(rf"\b{re.escape(alias)}s?\b", normalized):
            return _TYPE_LOOKUP[alias]
    return None


def detect_magic(infobox: Mapping[str, str] | None, markup: str | None = None) -> bool | None:
    """Magical status from an infobox flag, an enchantment bonus or a category marker.

    An explicit negative flag gives False; no signal at all gives None.
    """
    if infobox:
        for key in MAGIC_FLAG_FIELDS:
            value = (infobox.get(key) or "").strip().lower()
            if not value:
                continue
            return value not in NEGATIVE_FLAGS

        name = infobox.get("name") or infobox.get("title") or ""
        if _ENCHANTMENT_BONUS.search(name):
            return True

    if markup and _MAGIC_CATEGORY.search(markup):
        return True
    return None


def format_title(title: str) -> str:
    """Drop a trailing disambiguation suffix ("Dragon's Breath (item)" -> "Dragon's Breath")."""
    return _DISAMBIGUATION_SUFFIX.sub("", title)


def slugify(title: str) -> str:
    return _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")


def _to_degrees(word: int) -> float:
    # (word + 0.5) / 2**32 lies strictly inside (0, 1)
    return (word + 0.5) / 2**32 * 180 - 90


def coordinates(title: str) -> Coordinates:
    """Deterministic pseudo-random placement derived from the title."""
    digest = hashlib.sha256(title.encode("utf-8")).digest()
    lat = int.from_bytes(digest[0:4], "big")
    lng = int.from_bytes(digest[4:8], "big")
    return Coordinates(lat=_to_degrees(lat), lng=_to_degrees(lng))
