"""Transaction endpoints. Balance bookkeeping lives in ``LedgerService``."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from fintrack.auth.tokens import Identity
from fintrack.dependencies import current_identity, get_ledger, valid_id
from fintrack.models.entities import EntryType, TransactionWithDetails
from fintrack.models.requests import TransactionCreate, TransactionFilters, TransactionUpdate
from fintrack.models.responses import ApiResponse
from fintrack.services.ledger import LedgerService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=ApiResponse[List[TransactionWithDetails]])
async def list_transactions(
    start_date: Optional[date] = Query(None, description="Inclusive lower bound (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Inclusive upper bound (YYYY-MM-DD)"),
    account_id: Optional[int] = Query(None),
    category_id: Optional[int] = Query(None),
    type: Optional[EntryType] = Query(None),
    identity: Identity = Depends(current_identity),
    ledger: LedgerService = Depends(get_ledger),
):
    filters = TransactionFilters(
        start_date=start_date,
        end_date=end_date,
        account_id=account_id,
        category_id=category_id,
        type=type,
    )
    return ApiResponse(data=ledger.list_transactions(identity, filters))


@router.get("/{id}", response_model=ApiResponse[TransactionWithDetails])
async def get_transaction(
    identity: Identity = Depends(current_identity),
    transaction_id: int = Depends(valid_id),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.get_transaction(identity, transaction_id))


@router.post("", response_model=ApiResponse[TransactionWithDetails], status_code=201)
async def create_transaction(
    payload: TransactionCreate,
    identity: Identity = Depends(current_identity),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.create_transaction(identity, payload))


@router.put("/{id}", response_model=ApiResponse[TransactionWithDetails])
async def update_transaction(
    payload: TransactionUpdate,
    identity: Identity = Depends(current_identity),
    transaction_id: int = Depends(valid_id),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.update_transaction(identity, transaction_id, payload))


@router.delete("/{id}", response_model=ApiResponse[None])
async def delete_transaction(
    identity: Identity = Depends(current_identity),
    transaction_id: int = Depends(valid_id),
    ledger: LedgerService = Depends(get_ledger),
):
    ledger.delete_transaction(identity, transaction_id)
    return ApiResponse(message="Transaction deleted successfully")
