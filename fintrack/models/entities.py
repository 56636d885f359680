"""Stored entity models."""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
from fintrack.utils.money import Money


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"
    CASH = "cash"


class EntryType(str, Enum):
    """Direction of a transaction or category."""

    INCOME = "income"
    EXPENSE = "expense"


class User(BaseModel):
    """Registered user (password material never leaves the store)."""

    id: int
    email: str
    password_hash: str = Field(..., exclude=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class Account(BaseModel):
    """A money container whose balance is the net of its transactions."""

    id: int
    user_id: int
    name: str
    type: AccountType
    balance: Money = Field(default=Decimal("0.00"), description="Incrementally maintained balance")
    currency: str = Field(default="USD", description="Currency code")
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class Category(BaseModel):
    id: int
    user_id: int
    name: str
    type: EntryType
    color: str = "#6B7280"
    icon: Optional[str] = None
    is_default: bool = False
    created_at: datetime
    updated_at: datetime


class Transaction(BaseModel):
    """Transaction model. ``amount`` is always positive; ``type`` carries the sign."""

    id: int
    user_id: int
    account_id: int
    category_id: int
    amount: Money
    type: EntryType
    description: Optional[str] = None
    date: date
    created_at: datetime
    updated_at: datetime


class TransactionWithDetails(Transaction):
    """Transaction joined with display fields of its account and category."""

    account_name: str = "Unknown Account"
    category_name: str = "Unknown Category"
    category_color: str = "#6B7280"
    category_icon: Optional[str] = None


class SavingsGoal(BaseModel):
    """Savings goal. ``is_achieved`` always equals ``current_amount >= target_amount``."""

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    target_amount: Money
    current_amount: Money = Field(default=Decimal("0.00"))
    target_date: Optional[date] = None
    color: str = "#10B981"
    is_achieved: bool = False
    created_at: datetime
    updated_at: datetime


class GoalContribution(BaseModel):
    """Append-only record of money put towards a goal."""

    id: int
    goal_id: int
    transaction_id: Optional[int] = None
    amount: Money
    contribution_date: Optional[date] = None
    description: Optional[str] = None
    created_at: datetime
