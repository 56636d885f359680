"""Savings goal endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from fintrack.auth.tokens import Identity
from fintrack.dependencies import current_identity, get_ledger, get_store, valid_id
from fintrack.errors import NotFound
from fintrack.models.entities import GoalContribution, SavingsGoal
from fintrack.models.requests import ContributionCreate, SavingsGoalCreate, SavingsGoalUpdate
from fintrack.models.responses import ApiResponse
from fintrack.services.ledger import LedgerService
from fintrack.storage.base import EntityStore

router = APIRouter(prefix="/api/savings-goals", tags=["savings-goals"])


@router.get("", response_model=ApiResponse[List[SavingsGoal]])
async def list_goals(
    identity: Identity = Depends(current_identity),
    store: EntityStore = Depends(get_store),
):
    return ApiResponse(data=store.savings_goals.list(user_id=identity.user_id))


# Registered before "/{id}" routes so "contribute" is never parsed as an id
@router.post("/contribute", response_model=ApiResponse[GoalContribution], status_code=201)
async def contribute(
    payload: ContributionCreate,
    identity: Identity = Depends(current_identity),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.contribute(identity, payload))


@router.get("/{id}", response_model=ApiResponse[SavingsGoal])
async def get_goal(
    identity: Identity = Depends(current_identity),
    goal_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    goal = store.savings_goals.find_owned(goal_id, identity.user_id)
    if goal is None:
        raise NotFound("Savings goal not found")
    return ApiResponse(data=goal)


@router.post("", response_model=ApiResponse[SavingsGoal], status_code=201)
async def create_goal(
    payload: SavingsGoalCreate,
    identity: Identity = Depends(current_identity),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.create_goal(identity, payload))


@router.put("/{id}", response_model=ApiResponse[SavingsGoal])
async def update_goal(
    payload: SavingsGoalUpdate,
    identity: Identity = Depends(current_identity),
    goal_id: int = Depends(valid_id),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.update_goal(identity, goal_id, payload))


@router.delete("/{id}", response_model=ApiResponse[None])
async def delete_goal(
    identity: Identity = Depends(current_identity),
    goal_id: int = Depends(valid_id),
    store: EntityStore = Depends(get_store),
):
    with store.atomic():
        if store.savings_goals.find_owned(goal_id, identity.user_id) is None:
            raise NotFound("Savings goal not found")
        store.savings_goals.delete(goal_id)
    return ApiResponse(message="Savings goal deleted successfully")


@router.get("/{id}/contributions", response_model=ApiResponse[List[GoalContribution]])
async def list_contributions(
    identity: Identity = Depends(current_identity),
    goal_id: int = Depends(valid_id),
    ledger: LedgerService = Depends(get_ledger),
):
    return ApiResponse(data=ledger.list_contributions(identity, goal_id))
