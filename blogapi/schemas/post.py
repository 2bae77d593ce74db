"""Request/response schemas for posts."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)

from blogapi.schemas.category import SLUG_PATTERN, CategoryRead

TITLE_MIN_LEN = 3
TITLE_MAX_LEN = 200
CONTENT_MIN_LEN = 50
CONTENT_MAX_LEN = 100_000
EXCERPT_MAX_LEN = 300
IMAGE_MAX_LEN = 2048

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _check_image_url(value: str) -> str:
    """Reject anything but an http(s) URL. The string is kept exactly as sent."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as e:
        raise ValueError("must be a valid http(s) URL") from e
    return value


ImageUrl = Annotated[str, Field(max_length=IMAGE_MAX_LEN), AfterValidator(_check_image_url)]


class PostCreate(BaseModel):
    """New post. The author is always the authenticated caller."""

    title: str = Field(..., min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    image: ImageUrl | None = Field(default=None, description="Cover image URL")
    content: str = Field(..., min_length=CONTENT_MIN_LEN, max_length=CONTENT_MAX_LEN)
    excerpt: str | None = Field(default=None, max_length=EXCERPT_MAX_LEN)
    publish: bool = False
    category_ids: list[UUID] = Field(default_factory=list)


class PostUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied.

    Omitting publish leaves the publish state unchanged; supplying category_ids replaces
    the post's categories (an empty list removes them all).
    """

    title: str | None = Field(default=None, min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    image: ImageUrl | None = None
    content: str | None = Field(
        default=None, min_length=CONTENT_MIN_LEN, max_length=CONTENT_MAX_LEN
    )
    excerpt: str | None = Field(default=None, max_length=EXCERPT_MAX_LEN)
    publish: bool | None = None
    category_ids: list[UUID] | None = None


class PostRead(BaseModel):
    """Post as returned by the API, with its categories."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    slug: str
    image: str | None = None
    content: str
    excerpt: str | None = None
    is_published: bool
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    categories: list[CategoryRead] = Field(default_factory=list)
