"""
Library item API routes.
"""
import logging
from typing import List, Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from domain.errors import (
    CatalogError,
    CategoryError,
    DuplicateItem,
    ItemNotFound,
    StoreFailure,
    ValidationError,
)
from domain.models import LibraryItem
from services.catalog import Catalog
from services.id_allocator import IdAllocator
from services.items import apply_changes, create_item, filter_by_category

router = APIRouter()
logger = logging.getLogger(__name__)


class ItemCreate(BaseModel):
    category: str
    title: str
    creator: str
    detail: Union[int, str]


class ItemUpdate(BaseModel):
    title: Optional[str] = None
    creator: Optional[str] = None
    detail: Optional[Union[int, str]] = None


class ItemResponse(BaseModel):
    item_id: str
    category: str
    title: str
    creator: str
    detail_label: str
    detail_value: Union[int, str]


def item_to_response(item: LibraryItem) -> ItemResponse:
    """Convert domain LibraryItem to API response."""
    return ItemResponse(**item.to_dict())


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_allocator(request: Request) -> IdAllocator:
    return request.app.state.allocator


def _http_error(exc: CatalogError) -> HTTPException:
    if isinstance(exc, (ValidationError, CategoryError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ItemNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DuplicateItem):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, StoreFailure):
        logger.error("Store failure: %s", exc)
        return HTTPException(status_code=503, detail="Catalog storage is unavailable")
    return HTTPException(status_code=500, detail=str(exc))


@router.get("", response_model=List[ItemResponse])
async def list_items(category: Optional[str] = None, catalog: Catalog = Depends(get_catalog)):
    """List all items ordered by ID, optionally restricted to one category."""
    items = catalog.list_items()
    if category:
        try:
            items = filter_by_category(items, category)
        except CatalogError as exc:
            raise _http_error(exc)
    return [item_to_response(i) for i in items]


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str, catalog: Catalog = Depends(get_catalog)):
    item = catalog.get_by_id(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item_to_response(item)


@router.post("", response_model=ItemResponse, status_code=201)
async def add_item(
    data: ItemCreate,
    catalog: Catalog = Depends(get_catalog),
    allocator: IdAllocator = Depends(get_allocator),
):
    """Create a new item; the ID is assigned from the category's sequence."""
    try:
        item = create_item(allocator, data.category, data.title, data.creator, data.detail)
        catalog.add(item)
    except CatalogError as exc:
        raise _http_error(exc)
    return item_to_response(item)


@router.patch("/{item_id}", response_model=ItemResponse)
async def update_item(item_id: str, data: ItemUpdate, catalog: Catalog = Depends(get_catalog)):
    """Change any of title, creator or the type-specific detail."""
    item = catalog.get_by_id(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    try:
        edited = apply_changes(item, title=data.title, creator=data.creator, detail=data.detail)
        catalog.update(edited)
    except CatalogError as exc:
        raise _http_error(exc)
    return item_to_response(edited)


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: str, catalog: Catalog = Depends(get_catalog)):
    try:
        removed = catalog.remove(item_id)
    except CatalogError as exc:
        raise _http_error(exc)
    if not removed:
        raise HTTPException(status_code=404, detail="Item not found")
    return Response(status_code=204)
