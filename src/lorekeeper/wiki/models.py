# ABOUTME: Pydantic models for wiki API payloads and the parsed document model
# ABOUTME: API responses are validated at the boundary; documents are sections with optional infoboxes

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class Revision(BaseModel):
    """One page revision. Older MediaWiki versions put the content under ``*``."""

    content: str = Field(validation_alias=AliasChoices("content", "*"))


class PageEntry(BaseModel):
    title: str | None = None
    revisions: list[Revision] = Field(default_factory=list)


class PageQuery(BaseModel):
    # Keyed by an opaque page id ("-1" for missing pages)
    pages: dict[str, PageEntry] = Field(min_length=1)


class PageQueryResponse(BaseModel):
    """Response of ``action=query&prop=revisions``."""

    query: PageQuery

    def first_page(self) -> PageEntry:
        return next(iter(self.query.pages.values()))


class CategoryMemberEntry(BaseModel):
    pageid: int | None = None
    ns: int | None = None
    title: str


class CategoryMembersQuery(BaseModel):
    categorymembers: list[CategoryMemberEntry]


class CategoryMembersResponse(BaseModel):
    """Response of ``action=query&list=categorymembers``."""

    query: CategoryMembersQuery


class ArticleEntry(BaseModel):
    id: int
    title: str
    url: str


class ArticlesListResponse(BaseModel):
    """Response of the Fandom ``/api/v1/Articles/List`` endpoint."""

    items: list[ArticleEntry]
    basepath: str | None = None


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


class CategoryMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    url: str


# ---------------------------------------------------------------------------
# Parsed document
# ---------------------------------------------------------------------------


class Infobox(BaseModel):
    """Key/value panel of a page. Values are display text, keys are the raw argument names."""

    name: str
    fields: dict[str, str] = Field(default_factory=dict)


class Section(BaseModel):
    title: str | None = Field(None, description="Heading text, None for the lead section")
    level: int = Field(0, description="Heading level, 0 for the lead section")
    text: str = Field("", description="Raw wikitext of the section, subsections excluded")
    infoboxes: list[Infobox] = Field(default_factory=list)


class WikiDocument(BaseModel):
    """Structured representation of one page's wikitext."""

    sections: list[Section] = Field(default_factory=list)

    @property
    def lead(self) -> Section | None:
        return self.sections[0] if self.sections else None

    def section(self, title: str) -> Section | None:
        """First section whose heading matches ``title`` (case-insensitive)."""
        wanted = title.strip().lower()
        for section in self.sections:
            if section.title and section.title.strip().lower() == wanted:
                return section
        return None


# ---------------------------------------------------------------------------
# Image resolution
# ---------------------------------------------------------------------------


class ResolvedImage(BaseModel):
    kind: Literal["resolved"] = "resolved"
    name: str
    url: str


class ImageNotFound(BaseModel):
    kind: Literal["not_found"] = "not_found"
    name: str
    reason: str


ImageLookup = ResolvedImage | ImageNotFound
