"""
Library item repository backed by SQLAlchemy.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import sessionmaker

from db import SessionLocal
from domain.errors import StoreFailure
from domain.models import ITEM_TYPES, ItemCategory, LibraryItem
from repositories.base import ItemStore
from repositories.models import LibraryItemORM
from repositories.session import transaction

# ORM column holding each category's type-specific attribute
DETAIL_COLUMNS: Dict[ItemCategory, str] = {
    ItemCategory.BOOK: "num_pages",
    ItemCategory.DISC: "runtime_minutes",
    ItemCategory.PERIODICAL: "issue_number",
    ItemCategory.INTERACTIVE_MEDIA: "platform",
}


def _item_from_orm(orm: LibraryItemORM) -> LibraryItem:
    category = ItemCategory(orm.category)
    item_cls = ITEM_TYPES[category]
    return item_cls(
        orm.item_id,
        orm.title,
        orm.creator,
        getattr(orm, DETAIL_COLUMNS[category]),
    )


def _update_orm_from_item(orm: LibraryItemORM, item: LibraryItem) -> None:
    orm.category = item.category.value
    orm.title = item.title
    orm.creator = item.creator
    for category, column in DETAIL_COLUMNS.items():
        setattr(orm, column, item.detail_value if category == item.category else None)


class ItemsRepository(ItemStore):
    """Item rows; every call runs in its own transaction."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory or SessionLocal

    def load_all_items(self) -> List[LibraryItem]:
        items = []
        with transaction(self._session_factory, "load library items") as session:
            for orm in session.query(LibraryItemORM).order_by(LibraryItemORM.item_id):
                try:
                    items.append(_item_from_orm(orm))
                except ValueError as exc:
                    raise StoreFailure(f"Stored item {orm.item_id!r} is invalid: {exc}") from exc
        return items

    def upsert(self, item: LibraryItem) -> None:
        """Insert the item, or overwrite the existing row with the same ID."""
        with transaction(self._session_factory, f"save item {item.item_id}") as session:
            orm = session.get(LibraryItemORM, item.item_id)
            if orm is None:
                orm = LibraryItemORM(item_id=item.item_id)
            _update_orm_from_item(orm, item)
            session.add(orm)

    def delete(self, item: LibraryItem) -> None:
        with transaction(self._session_factory, f"delete item {item.item_id}") as session:
            orm = session.get(LibraryItemORM, item.item_id)
            if orm:
                session.delete(orm)
