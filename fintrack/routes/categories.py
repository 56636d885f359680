"""Category endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from fintrack.auth.tokens import Identity
from fintrack.dependencies import current_identity, get_store, valid_id
from fintrack.errors import NotFound
from fintrack.models.entities import Category, EntryType
from fintrack.models.requests import CategoryCreate, CategoryUpdate
from fintrack.models.responses import ApiResponse
from fintrack.storage.base import EntityStore

router = APIRouter(prefix="/api/categories", tags=["categories"])


def _owned_category(store: EntityStore, category_id: int, identity: Identity) -> Category:
    category = store.categories.find_owned(category_id, identity.user_id)
    if category is None:
        raise NotFound("Category not found")
    return category


@router.get("", response_model=ApiResponse[List[Category]])
async def list_categories(
    type: Optional[EntryType] = Query(None, description="Only income or only expense categories"),
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    filters = {"user_id": identity.user_id}
    if type is not None:
        filters["type"] = type
    return ApiResponse(data=store.categories.list(**filters))


@router.get("/{id}", response_model=ApiResponse[Category])
async def get_category(
    identity: Identity = Depends(current_identity),
    category_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    return ApiResponse(data=_owned_category(store, category_id, identity))


@router.post("", response_model=ApiResponse[Category], status_code=201)
async def create_category(
    payload: CategoryCreate,
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    category = store.categories.create(user_id=identity.user_id, is_default=False, **payload.model_dump())
    return ApiResponse(data=category)


@router.put("/{id}", response_model=ApiResponse[Category])
async def update_category(
    payload: CategoryUpdate,
    identity: Identity = Depends(current_identity),
    category_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    with store.atomic():
        _owned_category(store, category_id, identity)
        changes = payload.model_dump(exclude_unset=True)
        for key in ("name", "type", "color"):
            if changes.get(key) is None:
                changes.pop(key, None)
        category = store.categories.update(category_id, **changes)
    return ApiResponse(data=category)


@router.delete("/{id}", response_model=ApiResponse[None])
async def delete_category(
    identity: Identity = Depends(current_identity),
    category_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    with store.atomic():
        _owned_category(store, category_id, identity)
        store.categories.delete(category_id)
    return ApiResponse(message="Category deleted successfully")
