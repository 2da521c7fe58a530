"""
Core domain models for the library catalog.
These are framework-agnostic and can be used across all services.

Every item validates its fields on construction and on each assignment, so an
item in an invalid state can never be built or handed to a store.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type

from domain.errors import InvalidCategory, MissingCategory, ValidationError


class ItemCategory(str, Enum):
    """Kinds of library items. Each kind owns a fixed 2-character ID prefix."""
    BOOK = "book"
    DISC = "disc"
    PERIODICAL = "periodical"
    INTERACTIVE_MEDIA = "interactive_media"

    @property
    def prefix(self) -> str:
        return CATEGORY_PREFIXES[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "ItemCategory":
        """
        Resolve a user-supplied category name.

        Matching is case-insensitive, and "-", "_" and spaces are
        interchangeable, so "Interactive-Media", "interactive media" and
        "INTERACTIVE_MEDIA" all resolve to the same category. The legacy names
        dvd, magazine and video_game are accepted too.

        Raises:
            MissingCategory: value is None, empty or only whitespace
            InvalidCategory: value does not name a supported category
        """
        if isinstance(value, ItemCategory):
            return value
        if value is None or not str(value).strip():
            raise MissingCategory()
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return CATEGORY_ALIASES[key]
        except KeyError:
            raise InvalidCategory(str(value)) from None


CATEGORY_PREFIXES: Dict[ItemCategory, str] = {
    ItemCategory.BOOK: "B1",
    ItemCategory.DISC: "D2",
    ItemCategory.PERIODICAL: "M3",
    ItemCategory.INTERACTIVE_MEDIA: "V4",
}

CATEGORY_ALIASES: Dict[str, ItemCategory] = {
    "book": ItemCategory.BOOK,
    "disc": ItemCategory.DISC,
    "dvd": ItemCategory.DISC,
    "periodical": ItemCategory.PERIODICAL,
    "magazine": ItemCategory.PERIODICAL,
    "interactive_media": ItemCategory.INTERACTIVE_MEDIA,
    "video_game": ItemCategory.INTERACTIVE_MEDIA,
}


def _require_text(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"{label} must not be empty")
    return value.strip()


def _require_positive_int(value: Any, label: str) -> int:
    # bool is an int subclass; True must not sneak in as 1
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a positive number")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"{label} must be a positive number") from None
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{label} must be a positive number")
    return value


_BASE_LABELS = {"item_id": "ID", "title": "Title", "creator": "Creator"}


@dataclass
class LibraryItem:
    """
    An entry in the catalog.

    Subclasses add exactly one type-specific attribute, named by
    `detail_field`. Display and update code should go through
    `detail_label` / `detail_value` / `set_detail` rather than checking the
    concrete type.
    """
    item_id: str
    title: str
    creator: str

    category: ClassVar[ItemCategory]
    detail_field: ClassVar[str] = ""
    detail_label: ClassVar[str] = ""
    creator_label: ClassVar[str] = "Creator"
    display_name: ClassVar[str] = "Item"

    def __post_init__(self) -> None:
        if type(self) is LibraryItem:
            raise TypeError("LibraryItem is abstract; build a Book, Disc, Periodical or InteractiveMedia")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _BASE_LABELS:
            value = _require_text(value, _BASE_LABELS[name])
            current = self.__dict__.get("item_id")
            if name == "item_id" and current is not None and current != value:
                raise ValidationError("ID cannot be changed once assigned")
        elif name == self.detail_field:
            value = self._check_detail(value)
        super().__setattr__(name, value)

    @classmethod
    def _check_detail(cls, value: Any) -> Any:
        raise NotImplementedError

    @property
    def detail_value(self) -> Any:
        return getattr(self, self.detail_field)

    def set_detail(self, value: Any) -> None:
        """Validate and assign the type-specific attribute."""
        setattr(self, self.detail_field, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item_id,
            "category": self.category.value,
            "title": self.title,
            "creator": self.creator,
            "detail_label": self.detail_label,
            "detail_value": self.detail_value,
        }

    def __str__(self) -> str:
        return (
            f"[{self.display_name}] ID: {self.item_id} - Title: {self.title} - "
            f"{self.creator_label}: {self.creator} - {self.detail_label}: {self.detail_value}"
        )


@dataclass
class Book(LibraryItem):
    pages: int

    category: ClassVar[ItemCategory] = ItemCategory.BOOK
    detail_field: ClassVar[str] = "pages"
    detail_label: ClassVar[str] = "Pages"
    creator_label: ClassVar[str] = "Author"
    display_name: ClassVar[str] = "Book"

    @classmethod
    def _check_detail(cls, value: Any) -> int:
        return _require_positive_int(value, "Pages")


@dataclass
class Disc(LibraryItem):
    runtime_minutes: int

    category: ClassVar[ItemCategory] = ItemCategory.DISC
    detail_field: ClassVar[str] = "runtime_minutes"
    detail_label: ClassVar[str] = "Runtime (minutes)"
    creator_label: ClassVar[str] = "Director"
    display_name: ClassVar[str] = "Disc"

    @classmethod
    def _check_detail(cls, value: Any) -> int:
        return _require_positive_int(value, "Runtime")


@dataclass
class Periodical(LibraryItem):
    issue_number: int

    category: ClassVar[ItemCategory] = ItemCategory.PERIODICAL
    detail_field: ClassVar[str] = "issue_number"
    detail_label: ClassVar[str] = "Issue number"
    creator_label: ClassVar[str] = "Editor"
    display_name: ClassVar[str] = "Periodical"

    @classmethod
    def _check_detail(cls, value: Any) -> int:
        return _require_positive_int(value, "Issue number")


@dataclass
class InteractiveMedia(LibraryItem):
    platform: str

    category: ClassVar[ItemCategory] = ItemCategory.INTERACTIVE_MEDIA
    detail_field: ClassVar[str] = "platform"
    detail_label: ClassVar[str] = "Platform"
    creator_label: ClassVar[str] = "Publisher"
    display_name: ClassVar[str] = "Interactive Media"

    @classmethod
    def _check_detail(cls, value: Any) -> str:
        return _require_text(value, "Platform")


ITEM_TYPES: Dict[ItemCategory, Type[LibraryItem]] = {
    ItemCategory.BOOK: Book,
    ItemCategory.DISC: Disc,
    ItemCategory.PERIODICAL: Periodical,
    ItemCategory.INTERACTIVE_MEDIA: InteractiveMedia,
}
