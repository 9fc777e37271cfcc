"""Content items - paged (image) and chaptered (text) stories."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional

from ..errors import InvalidContentError


class ContentModel(str, Enum):
    """How a content item is split into readable units."""
    PAGED = "paged"
    CHAPTERED = "chaptered"


# Story type names used by the web front end
_LEGACY_TYPES = {
    "image": ContentModel.PAGED,
    "text": ContentModel.CHAPTERED,
}


@dataclass(frozen=True)
class Chapter:
    """A chapter of a text story."""
    title: str
    paragraphs: tuple[str, ...]

    @property
    def paragraph_count(self) -> int:
        return len(self.paragraphs)


@dataclass(frozen=True)
class ContentItem:
    """
    A story or comic loaded into the session.

    Attributes:
        id: Catalog identifier
        title: Display title
        categories: Ordered category tags, used for persona ranking
        content_model: paged (one unit per page) or chaptered (one unit per paragraph)
        page_count: Number of pages, paged items only
        chapters: Ordered chapters, chaptered items only
    """

    id: str
    title: str
    categories: tuple[str, ...] = ()
    content_model: ContentModel = ContentModel.PAGED
    page_count: int = 0
    chapters: tuple[Chapter, ...] = ()

    # Catalog metadata (browse page)
    description: str = ""
    rating: float = 0.0
    popularity: int = 0
    release_date: Optional[str] = None

    def __post_init__(self):
        if self.content_model == ContentModel.PAGED:
            if self.page_count < 1:
                raise InvalidContentError(f"Paged item {self.id!r} must have at least one page")
        else:
            if not self.chapters:
                raise InvalidContentError(f"Chaptered item {self.id!r} must have at least one chapter")
            for index, chapter in enumerate(self.chapters):
                if chapter.paragraph_count < 1:
                    raise InvalidContentError(
                        f"Chapter {index} of {self.id!r} must have at least one paragraph"
                    )

    @property
    def is_paged(self) -> bool:
        return self.content_model == ContentModel.PAGED

    @property
    def total_units(self) -> int:
        """Page count, or total paragraph count across all chapters."""
        if self.is_paged:
            return self.page_count
        return sum(chapter.paragraph_count for chapter in self.chapters)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["content_model"] = self.content_model.value
        data["categories"] = list(self.categories)
        data["chapters"] = [
            {"title": c.title, "paragraphs": list(c.paragraphs)} for c in self.chapters
        ]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ContentItem":
        """
        Build an item from a catalog record.

        Accepts the canonical layout (content_model/page_count/chapters) as well as
        the web front end's Comic layout (type "image"/"text", pages, textContent).
        """
        if "content_model" in data:
            try:
                model = ContentModel(data["content_model"])
            except ValueError:
                raise InvalidContentError(f"Unknown content model: {data['content_model']!r}")
        elif data.get("type") in _LEGACY_TYPES:
            model = _LEGACY_TYPES[data["type"]]
        else:
            raise InvalidContentError(f"Item {data.get('id')!r} has no content model")

        page_count = int(data.get("page_count", 0) or 0)
        if not page_count and data.get("pages"):
            page_count = len(data["pages"])

        raw_chapters = data.get("chapters") or data.get("textContent") or []
        chapters = tuple(
            Chapter(
                title=c.get("title", ""),
                paragraphs=tuple(c.get("paragraphs", [])),
            )
            for c in raw_chapters
        )

        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            categories=tuple(data.get("categories", [])),
            content_model=model,
            page_count=page_count if model == ContentModel.PAGED else 0,
            chapters=chapters if model == ContentModel.CHAPTERED else (),
            description=data.get("description", ""),
            rating=float(data.get("rating", 0.0) or 0.0),
            popularity=int(data.get("popularity", 0) or 0),
            release_date=data.get("release_date") or data.get("releaseDate"),
        )


def total_units(item: ContentItem) -> int:
    """Number of readable units in an item."""
    return item.total_units


def load_catalog(records: list[dict]) -> list[ContentItem]:
    """Build the session catalog from raw records, keeping their order."""
    return [ContentItem.from_dict(record) for record in records]
