# ABOUTME: Wikitext to document model conversion built on wikitextparser
# ABOUTME: Splits pages into sections, collects infoboxes and reduces markup to display text

import re

import wikitextparser as wtp

from lorekeeper.wiki.models import Infobox, Section, WikiDocument

_REF_PATTERN = re.compile(
    r"<ref(?:erences)?\b[^>]*/>|<ref\b(?:[^>/]|/(?!>))*>.*?</ref>", re.IGNORECASE | re.DOTALL
)
_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
# [[File:...]] and [[Image:...]] may carry captions with nested links
_FILE_LINK_PATTERN = re.compile(r"\[\[\s*(?:File|Image)\s*:(?:[^\[\]]|\[\[[^\[\]]*\]\])*\]\]", re.IGNORECASE)
_CATEGORY_LINK_PATTERN = re.compile(r"\[\[\s*Category\s*:[^\[\]]*\]\]", re.IGNORECASE)
_TABLE_PATTERN = re.compile(r"^\s*\{\|.*?^\s*\|\}", re.MULTILINE | re.DOTALL)
_WORD_PATTERN = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[a-z]+|[A-Z]+|\d+")


def camel_case(key: str) -> str:
    """Convert an infobox argument name to camelCase ("item type" -> "itemType")."""
    words = _WORD_PATTERN.findall(key)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word.capitalize() for word in tail)


def strip_noise(markup: str) -> str:
    """Remove markup that never contributes display text."""
    text = _COMMENT_PATTERN.sub("", markup)
    text = _REF_PATTERN.sub("", text)
    text = _FILE_LINK_PATTERN.sub("", text)
    text = _CATEGORY_LINK_PATTERN.sub("", text)
    return _TABLE_PATTERN.sub("", text)


def display_text(markup: str) -> str:
    """Reduce a fragment of wikitext to the text a reader would see.

    Links become their label, templates and formatting are dropped and
    whitespace is collapsed.
    """
    text = wtp.parse(strip_noise(markup)).plain_text()
    return " ".join(text.split())


def _is_infobox(template: wtp.Template) -> bool:
    return "infobox" in template.normal_name().lower()


def _parse_infobox(template: wtp.Template) -> Infobox:
    fields: dict[str, str] = {}
    for argument in template.arguments:
        if argument.positional:
            continue
        name = argument.name.strip()
        if name and name not in fields:
            fields[name] = display_text(argument.value)
    return Infobox(name=template.normal_name(), fields=fields)


def parse_document(wikitext: str) -> WikiDocument:
    """Parse raw wikitext into sections and infoboxes."""
    parsed = wtp.parse(wikitext or "")

    sections: list[Section] = []
    for section in parsed.get_sections(include_subsections=False):
        title = section.title
        infoboxes = [_parse_infobox(template) for template in section.templates if _is_infobox(template)]
        sections.append(
            Section(
                title=title.strip() if title else None,
                level=section.level,
                text=section.contents,
                infoboxes=infoboxes,
            )
        )

    return WikiDocument(sections=sections)
