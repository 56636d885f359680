"""Request payload models.

Payloads only coerce types; partial updates rely on ``model_fields_set`` so
that omitted fields leave the stored value untouched.
"""
import datetime
from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from fintrack.models.entities import AccountType, EntryType
from fintrack.utils.money import Money


class RegisterRequest(BaseModel):
    email: str
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AccountCreate(BaseModel):
    name: str
    type: AccountType
    balance: Money = Field(default=Decimal("0.00"), description="Opening balance")
    currency: str = "USD"


class AccountUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[AccountType] = None
    balance: Optional[Money] = None
    currency: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryCreate(BaseModel):
    name: str
    type: EntryType
    color: str = "#6B7280"
    icon: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[EntryType] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class TransactionCreate(BaseModel):
    account_id: int
    category_id: int
    amount: Money
    type: EntryType
    description: Optional[str] = None
    date: date


class TransactionUpdate(BaseModel):
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    amount: Optional[Money] = None
    type: Optional[EntryType] = None
    description: Optional[str] = None
    date: Optional[datetime.date] = None


class TransactionFilters(BaseModel):
    """Listing filters, combined with logical AND. Date bounds are inclusive."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    type: Optional[EntryType] = None


class SavingsGoalCreate(BaseModel):
    name: str
    description: Optional[str] = None
    target_amount: Money
    target_date: Optional[date] = None
    color: str = "#10B981"


class SavingsGoalUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    target_amount: Optional[Money] = None
    target_date: Optional[date] = None
    color: Optional[str] = None


class ContributionCreate(BaseModel):
    goal_id: int
    amount: Money
    contribution_date: Optional[date] = None
    description: Optional[str] = None
