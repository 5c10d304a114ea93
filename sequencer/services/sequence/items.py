"""Sequence item and document models.

Items are a discriminated union on ``type``. Documents convert to and from
the JSON shape stored in the ``document_data`` column: image URLs are
proxy-wrapped once on the way out and unwrapped on the way in.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from sequencer.services.media.proxy import clean_legacy_items, wrap

YOUTUBE_ID_LENGTH = 11


class ImageItem(BaseModel):
    """Image entry of a sequence.

    Attributes:
        position: 1-based position in the sequence
        image_url: Canonical image URL (unwrapped while editing)
        alt_text: Accessible description / display name
        narration: Free text read alongside the image
    """

    type: Literal["image"] = "image"
    position: int = Field(default=0, ge=0)
    image_url: str = ""
    alt_text: str | None = None
    narration: str | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.image_url and self.image_url.strip())


class VideoItem(BaseModel):
    """Video entry of a sequence.

    Attributes:
        position: 1-based position in the sequence
        video_id: 11-char YouTube id or Drive file id
        url: Original source URL, kept for export and re-import
        title: Video title
        creator: Channel or author name
        thumbnail: Thumbnail URL
        duration_seconds: Length in seconds
    """

    type: Literal["video"] = "video"
    position: int = Field(default=0, ge=0)
    video_id: str = ""
    url: str | None = None
    title: str | None = None
    creator: str | None = None
    thumbnail: str | None = None
    duration_seconds: int | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.video_id and self.video_id.strip())

    @property
    def is_youtube(self) -> bool:
        """YouTube ids are exactly 11 characters; anything else is a Drive id."""
        return len(self.video_id) == YOUTUBE_ID_LENGTH


SequenceItem = Annotated[ImageItem | VideoItem, Field(discriminator="type")]

_items_adapter: TypeAdapter[list[SequenceItem]] = TypeAdapter(list[SequenceItem])


def parse_items(raw_items: list[dict[str, Any]]) -> list[ImageItem | VideoItem]:
    """Validate stored item dicts into typed items."""
    return _items_adapter.validate_python(raw_items)


def renumber(items: list[ImageItem | VideoItem]) -> None:
    """Rewrite positions in place to exactly 1..N."""
    for position, item in enumerate(items, start=1):
        item.position = position


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SequenceDocument(BaseModel):
    """An ordered collection of media items plus metadata.

    ``id`` is None until the document has been stored. ``is_published``
    mirrors the document-side visibility flag.
    """

    id: str | None = None
    owner_id: str | None = None
    slug: str | None = None
    title: str = ""
    description: str = ""
    items: list[SequenceItem] = Field(default_factory=list)
    creator_name: str | None = None
    creator_link: str | None = None
    thumbnail_url: str | None = None
    hashtags: list[str] = Field(default_factory=list)
    is_published: bool = False
    published_at: datetime | None = None

    @property
    def is_new(self) -> bool:
        """Whether the document has no server identity yet."""
        return self.id is None

    def valid_items(self) -> list[ImageItem | VideoItem]:
        """Items whose content field is non-blank."""
        return [item for item in self.items if item.is_valid]

    def to_document_data(
        self,
        creator_id: str | None = None,
        proxy_base: str | None = None,
    ) -> dict[str, Any]:
        """Build the stored JSON shape.

        Only valid items are included, renumbered 1..N, with image URLs
        wrapped exactly once.

        Args:
            creator_id: Owner id written to ``creator_id`` (defaults to owner_id)
            proxy_base: Relay endpoint path (defaults to config)

        Returns:
            Dict for the document_data column
        """
        items = []
        for position, item in enumerate(self.valid_items(), start=1):
            data = item.model_dump(exclude_none=True)
            data["position"] = position
            if isinstance(item, ImageItem):
                data["image_url"] = wrap(item.image_url.strip(), proxy_base)
            items.append(data)

        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "reviewed": "false",
            "creator_id": creator_id or self.owner_id,
            "is_published": "true" if self.is_published else "false",
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "items": items,
            "creator_name": _blank_to_none(self.creator_name),
            "creator_link": _blank_to_none(self.creator_link),
            "thumbnail_url": _blank_to_none(self.thumbnail_url),
            "hashtags": list(self.hashtags) or None,
        }

    @classmethod
    def from_document_data(
        cls,
        data: dict[str, Any],
        document_id: str | None = None,
        owner_id: str | None = None,
        slug: str | None = None,
        proxy_base: str | None = None,
    ) -> "SequenceDocument":
        """Load a document from its stored JSON shape.

        Image URLs are unwrapped (including legacy double wraps) and the
        legacy ``author`` key is accepted for ``creator_name``.

        Args:
            data: document_data column value
            document_id: Server identity
            owner_id: Owning user id
            slug: Stored slug
            proxy_base: Relay endpoint path (defaults to config)

        Returns:
            SequenceDocument ready for editing
        """
        items = parse_items(clean_legacy_items(data.get("items") or [], proxy_base))
        renumber(items)

        published_at = data.get("published_at")
        return cls(
            id=document_id,
            owner_id=owner_id or data.get("creator_id"),
            slug=slug,
            title=data.get("title") or "",
            description=data.get("description") or "",
            items=items,
            creator_name=data.get("creator_name") or data.get("author") or None,
            creator_link=data.get("creator_link") or None,
            thumbnail_url=data.get("thumbnail_url") or None,
            hashtags=list(data.get("hashtags") or []),
            is_published=data.get("is_published") in ("true", True),
            published_at=datetime.fromisoformat(published_at) if published_at else None,
        )


__all__ = [
    "ImageItem",
    "SequenceDocument",
    "SequenceItem",
    "VideoItem",
    "parse_items",
    "renumber",
]
