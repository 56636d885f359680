from .entities import (
    Account,
    AccountType,
    Category,
    EntryType,
    GoalContribution,
    SavingsGoal,
    Transaction,
    TransactionWithDetails,
    User,
)
from .requests import (
    AccountCreate,
    AccountUpdate,
    CategoryCreate,
    CategoryUpdate,
    ChangePasswordRequest,
    ContributionCreate,
    LoginRequest,
    RegisterRequest,
    SavingsGoalCreate,
    SavingsGoalUpdate,
    TransactionCreate,
    TransactionFilters,
    TransactionUpdate,
)
from .responses import ApiResponse, AuthPayload, HealthResponse, MessagePayload, PublicUser

__all__ = [
    "Account",
    "AccountType",
    "Category",
    "EntryType",
    "GoalContribution",
    "SavingsGoal",
    "Transaction",
    "TransactionWithDetails",
    "User",
    "AccountCreate",
    "AccountUpdate",
    "CategoryCreate",
    "CategoryUpdate",
    "ChangePasswordRequest",
    "ContributionCreate",
    "LoginRequest",
    "RegisterRequest",
    "SavingsGoalCreate",
    "SavingsGoalUpdate",
    "TransactionCreate",
    "TransactionFilters",
    "TransactionUpdate",
    "ApiResponse",
    "AuthPayload",
    "HealthResponse",
    "MessagePayload",
    "PublicUser",
]
