"""Demo data loaded into a fresh store."""
import logging
from datetime import date

from fintrack.storage.base import EntityStore

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
UNVERIFIED_PASSWORD_HASH = "mock_hash"


def seed_demo_data(store: EntityStore) -> int:
    """
    Populate ``store`` with a demo user and a small ledger.

    Balances and goal progress are opening figures, not derived from the
    seeded transactions.

    Returns:
        The demo user's id
    """
    user = store.users.create(
        email=DEMO_EMAIL,
        password_hash=UNVERIFIED_PASSWORD_HASH,
        first_name="Demo",
        last_name="User",
    )

    checking = store.accounts.create(user_id=user.id, name="Main Checking", type="checking", balance="2500.00")
    store.accounts.create(user_id=user.id, name="Savings Account", type="savings", balance="10000.00")
    credit = store.accounts.create(user_id=user.id, name="Credit Card", type="credit", balance="-1200.00")

    categories = {}
    for name, kind, color, icon in [
        ("Salary", "income", "#10B981", "💰"),
        ("Groceries", "expense", "#EF4444", "🛒"),
        ("Transportation", "expense", "#F59E0B", "🚗"),
        ("Entertainment", "expense", "#8B5CF6", "🎬"),
        ("Utilities", "expense", "#06B6D4", "⚡"),
    ]:
        categories[name] = store.categories.create(
            user_id=user.id, name=name, type=kind, color=color, icon=icon, is_default=True,
        )

    for account, category, amount, kind, description, day in [
        (checking, "Salary", "3000.00", "income", "Monthly salary", date(2025, 1, 1)),
        (checking, "Groceries", "150.00", "expense", "Weekly grocery shopping", date(2025, 1, 2)),
        (credit, "Transportation", "45.00", "expense", "Gas station", date(2025, 1, 3)),
        (checking, "Entertainment", "25.00", "expense", "Movie tickets", date(2025, 1, 4)),
        (checking, "Utilities", "120.00", "expense", "Electricity bill", date(2025, 1, 5)),
    ]:
        store.transactions.create(
            user_id=user.id,
            account_id=account.id,
            category_id=categories[category].id,
            amount=amount,
            type=kind,
            description=description,
            date=day,
        )

    emergency = store.savings_goals.create(
        user_id=user.id,
        name="Emergency Fund",
        description="Build a 6-month emergency fund",
        target_amount="15000.00",
        current_amount="5000.00",
        target_date=date(2025, 12, 31),
        color="#10B981",
    )
    vacation = store.savings_goals.create(
        user_id=user.id,
        name="Vacation",
        description="Save for European vacation",
        target_amount="3000.00",
        current_amount="1200.00",
        target_date=date(2025, 6, 1),
        color="#F59E0B",
    )
    store.goal_contributions.create(
        goal_id=emergency.id, amount="500.00", contribution_date=date(2025, 1, 1),
        description="Initial contribution",
    )
    store.goal_contributions.create(
        goal_id=vacation.id, amount="300.00", contribution_date=date(2025, 1, 1),
        description="Starting vacation fund",
    )

    logger.info("Seeded demo data", extra={"user_id": user.id, "email": DEMO_EMAIL})
    return user.id
