from typing import Any

from pydantic import Field, field_validator

from core.models.base import CamelModel, strip_text
from core.models.entity import EntityKind, MediaSlot


class KeyValue(CamelModel):
    key: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class BlogCreate(CamelModel):
    author_name: str = Field(..., min_length=1)
    heading: str = Field(..., min_length=1)
    location_name: str = Field(..., min_length=1)
    located_in: list[str] = Field(..., min_length=1)
    ideal_for: list[str] = Field(..., min_length=1)
    what_is_special: str = Field(..., min_length=1)
    how_to_reach: list[KeyValue] = []
    food_essentials: list[str] = Field(..., min_length=1)
    things_to_know: list[str] = Field(..., min_length=1)
    faq: list[KeyValue] = []

    @field_validator("author_name", "heading", "location_name", "what_is_special", mode="before")
    @classmethod
    def strip_text_fields(cls, value: Any) -> Any:
        return strip_text(value)


class BlogUpdate(CamelModel):
    author_name: str | None = Field(default=None, min_length=1)
    heading: str | None = Field(default=None, min_length=1)
    location_name: str | None = Field(default=None, min_length=1)
    located_in: list[str] | None = Field(default=None, min_length=1)
    ideal_for: list[str] | None = Field(default=None, min_length=1)
    what_is_special: str | None = Field(default=None, min_length=1)
    how_to_reach: list[KeyValue] | None = None
    food_essentials: list[str] | None = Field(default=None, min_length=1)
    things_to_know: list[str] | None = Field(default=None, min_length=1)
    faq: list[KeyValue] | None = None

    @field_validator("author_name", "heading", "location_name", "what_is_special", mode="before")
    @classmethod
    def strip_text_fields(cls, value: Any) -> Any:
        return strip_text(value)


class Blog(BlogCreate):
    id: str
    header_image: str | None = None
    hero_image: str | None = None
    created_at: str
    updated_at: str
    version: int = 1


BLOG = EntityKind(
    name="blog",
    label="Blog",
    document=Blog,
    slots=(
        MediaSlot(name="headerImage", attr="header_image", folder="blogs/headers", prefix="blog_header"),
        MediaSlot(name="heroImage", attr="hero_image", folder="blogs/heroes", prefix="blog_hero"),
    ),
)
