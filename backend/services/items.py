"""
Helpers for building and editing catalog items.

Used by the API routes and the command-line tool so both validate and
allocate the same way.
"""
import copy
from typing import Any, List, Optional

from domain.models import ITEM_TYPES, ItemCategory, LibraryItem
from services.id_allocator import IdAllocator

# Syntactically valid stand-in used to validate fields before an ID is spent
_PLACEHOLDER_ID = "PENDING"


def build_item(category: str, item_id: str, title: str, creator: str, detail: Any) -> LibraryItem:
    """
    Construct the concrete item for a category.

    Raises:
        MissingCategory / InvalidCategory: category is unusable
        ValidationError: any field is invalid
    """
    item_cls = ITEM_TYPES[ItemCategory.parse(category)]
    return item_cls(item_id, title, creator, detail)


def create_item(
    allocator: IdAllocator, category: str, title: str, creator: str, detail: Any
) -> LibraryItem:
    """
    Validate the fields, then allocate an identifier and return the new item.

    Validation runs first so a rejected item never consumes a sequence number.
    """
    draft = build_item(category, _PLACEHOLDER_ID, title, creator, detail)
    item_id = allocator.allocate(draft.category.value)
    return type(draft)(item_id, draft.title, draft.creator, draft.detail_value)


def apply_changes(
    item: LibraryItem,
    title: Optional[str] = None,
    creator: Optional[str] = None,
    detail: Any = None,
) -> LibraryItem:
    """Return an edited copy of item; None leaves a field unchanged."""
    edited = copy.deepcopy(item)
    if title is not None:
        edited.title = title
    if creator is not None:
        edited.creator = creator
    if detail is not None:
        edited.set_detail(detail)
    return edited


def filter_by_category(items: List[LibraryItem], category: str) -> List[LibraryItem]:
    wanted = ItemCategory.parse(category)
    return [item for item in items if item.category == wanted]
