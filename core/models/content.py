# =============================================================================
# core/models/content.py - Content Entity Schemas
# =============================================================================
# The three content kinds of the site share one shape:
# - Post: blog articles
# - Project: portfolio projects (named, with tech stack and links)
# - Service: services on offer (hook line, indexable flag)
#
# They form a tagged union, ContentEntity, discriminated by `kind`. Every
# entity exposes the same projection (slug, display_title, summary,
# is_published, updated_at), so listing, card and admin queries are written
# once in ContentService instead of once per kind.
#
# Field names are snake_case (matching the database columns); JSON on the
# wire uses camelCase aliases. Both spellings are accepted on input.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ContentKind(str, Enum):
    """The three tables behind the site."""
    POST = "post"
    PROJECT = "project"
    SERVICE = "service"


class ContentStatus(str, Enum):
    """
    Publication state. The only visibility field for every kind.

    - draft: visible in the dashboard only
    - published: visible on the public site and in default API queries
    """
    DRAFT = "draft"
    PUBLISHED = "published"


class ContentFormat(str, Enum):
    MARKDOWN = "markdown"
    MDX = "mdx"
    HTML = "html"


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Embedded Items
# =============================================================================

class FAQItem(CamelModel):
    question: str
    answer: str
    order_index: int = 0


class GalleryItem(CamelModel):
    url: str
    type: Literal["image", "video"] = "image"
    thumbnail_url: str | None = None
    caption: str | None = None
    order_index: int = 0


class DownloadItem(CamelModel):
    file_url: str
    label: str
    file_size: str | None = None
    file_type: str | None = None
    order_index: int = 0


RECOMMENDED_PATHS = {"blog": "/blog", "project": "/projects", "service": "/services"}


class RecommendedItem(CamelModel):
    """
    A "read next" link shown under an entity.

    Internal items point at another entity by slug; `url` overrides the link
    and is the only link an external item has.
    """

    id: str | None = None
    type: Literal["blog", "project", "service", "external"]
    title: str
    slug: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    excerpt: str | None = None

    @property
    def href(self) -> str:
        if self.url:
            return self.url
        base = RECOMMENDED_PATHS.get(self.type)
        if base and self.slug:
            return f"{base}/{self.slug}"
        return "#"


class ServiceFeature(CamelModel):
    title: str
    description: str = ""
    icon: str | None = None
    order_index: int = 0


class ServicePackage(CamelModel):
    """A priced tier of a service."""

    title: str
    price: float = Field(..., ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    features: list[str] = Field(default_factory=list)
    delivery_time: str | None = None
    revisions: int | None = Field(default=None, ge=0)
    is_popular: bool = False
    order_index: int = 0


class ServicePoint(CamelModel):
    """One line of a service's problem or solution list."""

    text: str
    order_index: int = 0


class Testimonial(CamelModel):
    name: str
    quote: str
    rating: int = Field(default=5, ge=1, le=5)
    avatar: str | None = None
    order_index: int = 0


# =============================================================================
# Entities
# =============================================================================

class ContentBase(CamelModel):
    """
    Fields shared by every content kind.

    `slug` may be empty on input; ContentService derives it from the title
    before anything is stored.
    """

    id: str | None = Field(default=None, description="Row id (uuid)")
    slug: str = Field(default="", max_length=200, description="Unique, URL-safe identifier")
    status: ContentStatus = Field(default=ContentStatus.DRAFT)

    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    thumbnail: str | None = None
    cover_image: str | None = None

    content: str = Field(default="", description="Body text")
    content_format: ContentFormat = ContentFormat.MARKDOWN

    publish_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # SEO overrides
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: list[str] = Field(default_factory=list)
    canonical_url: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    twitter_card: str | None = None

    faqs: list[FAQItem] = Field(default_factory=list)
    gallery: list[GalleryItem] = Field(default_factory=list)
    downloads: list[DownloadItem] = Field(default_factory=list)
    recommended: list[RecommendedItem] = Field(default_factory=list)

    # Input keys accepted in place of a field name, synonym -> field
    input_synonyms: ClassVar[dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _apply_synonyms(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for synonym, field_name in cls.input_synonyms.items():
                if data.get(synonym) and not data.get(field_name):
                    data = {**data, field_name: data[synonym]}
        return data

    # -------------------------------------------------------------------------
    # Shared projection
    # -------------------------------------------------------------------------

    @property
    def display_title(self) -> str:
        raise NotImplementedError

    @property
    def summary(self) -> str:
        raise NotImplementedError

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED.value

    def to_row(self, include: set[str] | None = None) -> dict[str, Any]:
        """
        Database row for this entity (snake_case, JSON-safe values).

        `kind` is implied by the table and never stored.
        """
        row = self.model_dump(mode="json", exclude={"kind"}, include=include)
        if row.get("id") is None:
            row.pop("id", None)
        return row


class Post(ContentBase):
    """A blog article."""

    kind: Literal["post"] = "post"

    title: str = Field(..., min_length=1, max_length=300)
    excerpt: str = ""
    author: str | None = None
    author_avatar: str | None = None
    read_time: str | None = None
    is_premium: bool = False
    layout: Literal["standard", "research"] = "standard"

    @property
    def display_title(self) -> str:
        return self.title

    @property
    def summary(self) -> str:
        return self.excerpt


class Project(ContentBase):
    """A portfolio project. `title` is accepted on input as a synonym for `name`."""

    kind: Literal["project"] = "project"

    name: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    tech_stack: list[str] = Field(default_factory=list)
    live_link: str | None = None
    repo_link: str | None = None
    featured: bool = False
    project_status: Literal["completed", "in-progress", "planned"] = "completed"
    progress: int | None = Field(default=None, ge=0, le=100)
    client_info: str | None = None

    input_synonyms: ClassVar[dict[str, str]] = {"title": "name", "excerpt": "description"}

    @property
    def display_title(self) -> str:
        return self.name

    @property
    def summary(self) -> str:
        return self.description


class Service(ContentBase):
    """A service offering."""

    kind: Literal["service"] = "service"

    input_synonyms: ClassVar[dict[str, str]] = {"name": "title"}

    title: str = Field(..., min_length=1, max_length=300)
    hook_line: str | None = None
    description: str = ""
    show_gallery: bool = False
    show_downloads: bool = False
    indexable: bool = True
    sitemap_priority: float | None = Field(default=None, ge=0.0, le=1.0)
    pricing: str | None = None

    features: list[ServiceFeature] = Field(default_factory=list)
    packages: list[ServicePackage] = Field(default_factory=list)
    problems: list[ServicePoint] = Field(default_factory=list)
    solutions: list[ServicePoint] = Field(default_factory=list)
    testimonials: list[Testimonial] = Field(default_factory=list)

    @property
    def display_title(self) -> str:
        return self.title

    @property
    def summary(self) -> str:
        return self.hook_line or self.description


ContentEntity = Annotated[Union[Post, Project, Service], Field(discriminator="kind")]


# =============================================================================
# Card View
# =============================================================================

class ContentCard(CamelModel):
    """
    Reduced projection of an entity for listing grids.

    Example:
        {
            "kind": "post",
            "id": "550e8400-...",
            "slug": "hello-world",
            "title": "Hello World",
            "excerpt": "First post",
            "thumbnail": "https://.../thumb.png",
            "category": "news",
            "date": "2024-01-15T10:30:00Z"
        }
    """

    kind: ContentKind
    id: str
    slug: str
    title: str
    excerpt: str = ""
    thumbnail: str | None = None
    category: str | None = None
    date: datetime | None = None
