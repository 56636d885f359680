"""Account endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from fintrack.auth.tokens import Identity
from fintrack.dependencies import current_identity, get_store, valid_id
from fintrack.errors import NotFound
from fintrack.models.entities import Account
from fintrack.models.requests import AccountCreate, AccountUpdate
from fintrack.models.responses import ApiResponse
from fintrack.storage.base import EntityStore

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


def _owned_account(store: EntityStore, account_id: int, identity: Identity) -> Account:
    account = store.accounts.find_owned(account_id, identity.user_id)
    if account is None:
        raise NotFound("Account not found")
    return account


@router.get("", response_model=ApiResponse[List[Account]])
async def list_accounts(
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    return ApiResponse(data=store.accounts.list(user_id=identity.user_id))


@router.get("/{id}", response_model=ApiResponse[Account])
async def get_account(
    identity: Identity = Depends(current_identity),
    account_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    return ApiResponse(data=_owned_account(store, account_id, identity))


@router.post("", response_model=ApiResponse[Account], status_code=201)
async def create_account(
    payload: AccountCreate,
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    """Open an account; ``balance`` is the opening balance."""
    account = store.accounts.create(user_id=identity.user_id, is_active=True, **payload.model_dump())
    return ApiResponse(data=account)


@router.put("/{id}", response_model=ApiResponse[Account])
async def update_account(
    payload: AccountUpdate,
    identity: Identity = Depends(current_identity),
    account_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    """
    Edit account fields. Omitted or null fields keep their value; an explicit
    ``balance`` overrides the running balance.
    """
    with store.atomic():
        _owned_account(store, account_id, identity)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        account = store.accounts.update(account_id, **changes)
    return ApiResponse(data=account)


@router.delete("/{id}", response_model=ApiResponse[None])
async def delete_account(
    identity: Identity = Depends(current_identity),
    account_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    with store.atomic():
        _owned_account(store, account_id, identity)
        store.accounts.delete(account_id)
    return ApiResponse(message="Account deleted successfully")
