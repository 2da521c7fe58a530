"""
Exceptions raised by the catalog core.

Everything derives from CatalogError so the API and CLI layers can catch the
whole family in one place and map each subclass to a user-facing outcome.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""


class ValidationError(CatalogError, ValueError):
    """An item attribute failed validation (empty title, non-positive count, ...)."""


class CategoryError(CatalogError, ValueError):
    """The category given to the allocator or item factory was unusable."""


class MissingCategory(CategoryError):
    """No category was supplied."""

    def __init__(self, message: str = "Category must not be empty"):
        super().__init__(message)


class InvalidCategory(CategoryError):
    """A category was supplied but it is not one of the supported kinds."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Invalid category: {category!r}")


class ItemNotFound(CatalogError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item {item_id!r} not found")


class DuplicateItem(CatalogError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item {item_id!r} already exists")


class StoreFailure(CatalogError):
    """The backing store could not complete an operation."""
