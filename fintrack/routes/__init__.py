from .accounts import router as accounts_router
from .auth import router as auth_router
from .categories import router as categories_router
from .savings_goals import router as savings_goals_router
from .transactions import router as transactions_router

__all__ = [
    "accounts_router",
    "auth_router",
    "categories_router",
    "savings_goals_router",
    "transactions_router",
]
