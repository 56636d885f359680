"""
Ledger consistency rules.

Account balances and savings-goal progress are derived aggregates that are
maintained incrementally: every transaction mutation applies (or reverses)
exactly its own signed amount on its account, and every contribution adds
its amount to its goal. Nothing here recomputes from full history.

All multi-step mutations run inside ``store.atomic()`` so a concurrent
writer never observes an account between the reverse and reapply steps.
The lock does not roll back, so every resulting balance or goal total is
computed and validated before the first write.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fintrack.auth.tokens import Identity
from fintrack.errors import InvalidInput, InvalidReference, NotFound
from fintrack.models.entities import (
    Account,
    Category,
    GoalContribution,
    SavingsGoal,
    Transaction,
    TransactionWithDetails,
)
from fintrack.models.requests import (
    ContributionCreate,
    SavingsGoalCreate,
    SavingsGoalUpdate,
    TransactionCreate,
    TransactionFilters,
    TransactionUpdate,
)
from fintrack.storage.base import EntityStore
from fintrack.utils.money import signed_amount, to_money

logger = logging.getLogger(__name__)


def _checked_money(value: Decimal) -> Decimal:
    try:
        return to_money(value)
    except ValueError as e:
        raise InvalidInput("Amount out of range") from e


def with_details(
    transaction: Transaction,
    account: Optional[Account],
    category: Optional[Category],
) -> TransactionWithDetails:
    """Join display fields from the transaction's account and category."""
    details = {}
    if account is not None:
        details["account_name"] = account.name
    if category is not None:
        details["category_name"] = category.name
        details["category_color"] = category.color
        details["category_icon"] = category.icon
    return TransactionWithDetails(**dict(transaction), **details)


class LedgerService:
    """Transaction and savings-goal mutations that keep aggregates consistent."""

    def __init__(self, store: EntityStore):
        self.store = store

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def list_transactions(
        self,
        identity: Identity,
        filters: Optional[TransactionFilters] = None,
    ) -> List[TransactionWithDetails]:
        """Caller's transactions matching every given filter."""
        filters = filters or TransactionFilters()
        rows = self.store.transactions.list(user_id=identity.user_id)

        if filters.start_date is not None:
            rows = [t for t in rows if t.date >= filters.start_date]
        if filters.end_date is not None:
            rows = [t for t in rows if t.date <= filters.end_date]
        if filters.account_id is not None:
            rows = [t for t in rows if t.account_id == filters.account_id]
        if filters.category_id is not None:
            rows = [t for t in rows if t.category_id == filters.category_id]
        if filters.type is not None:
            rows = [t for t in rows if t.type == filters.type]

        return [self._detail(t) for t in rows]

    def get_transaction(self, identity: Identity, transaction_id: int) -> TransactionWithDetails:
        transaction = self.store.transactions.find_owned(transaction_id, identity.user_id)
        if transaction is None:
            raise NotFound("Transaction not found")
        return self._detail(transaction)

    def create_transaction(self, identity: Identity, payload: TransactionCreate) -> TransactionWithDetails:
        """
        Record a transaction and apply its amount to the account.

        Both references and the resulting balance are checked before anything
        is written, so a rejected create leaves the store untouched.

        Raises:
            InvalidReference: Account or category missing or not owned
            InvalidInput: Resulting balance is out of range
        """
        with self.store.atomic():
            account = self._owned_account(identity, payload.account_id)
            category = self._owned_category(identity, payload.category_id)
            balances = self._plan_balances([
                (account.id, signed_amount(payload.type, payload.amount), None),
            ])

            transaction = self.store.transactions.create(
                user_id=identity.user_id,
                **payload.model_dump(),
            )
            account = self._commit_balances(balances)[account.id]

        logger.info(
            "Transaction created",
            extra={"transaction_id": transaction.id, "account_id": transaction.account_id,
                   "type": transaction.type.value, "amount": str(transaction.amount)},
        )
        return with_details(transaction, account, category)

    def update_transaction(
        self,
        identity: Identity,
        transaction_id: int,
        payload: TransactionUpdate,
    ) -> TransactionWithDetails:
        """
        Change a transaction, reversing its old effect and applying the new one.

        The reversal always runs, even when account, amount and type are
        unchanged. A missing old or new account is skipped with a warning
        instead of failing the update.

        Raises:
            NotFound: Transaction missing or not owned
            InvalidReference: Payload points at an account or category the
                caller does not own
            InvalidInput: A resulting balance is out of range
        """
        with self.store.atomic():
            original = self.store.transactions.find_owned(transaction_id, identity.user_id)
            if original is None:
                raise NotFound("Transaction not found")

            changes = payload.model_dump(exclude_unset=True)
            for key in ("account_id", "category_id", "amount", "type", "date"):
                # Absent or null keeps the stored value
                if changes.get(key) is None:
                    changes.pop(key, None)
            if "account_id" in changes and changes["account_id"] != original.account_id:
                self._owned_account(identity, changes["account_id"])
            if "category_id" in changes and changes["category_id"] != original.category_id:
                self._owned_category(identity, changes["category_id"])

            new_effect = signed_amount(
                changes.get("type", original.type),
                changes.get("amount", original.amount),
            )
            balances = self._plan_balances([
                (original.account_id, -signed_amount(original.type, original.amount), original.id),
                (changes.get("account_id", original.account_id), new_effect, original.id),
            ])
            updated = self.store.transactions.update(transaction_id, **changes)
            self._commit_balances(balances)

        logger.info(
            "Transaction updated",
            extra={"transaction_id": transaction_id,
                   "old_account_id": original.account_id, "new_account_id": updated.account_id,
                   "old_amount": str(signed_amount(original.type, original.amount)),
                   "new_amount": str(signed_amount(updated.type, updated.amount))},
        )
        return self._detail(updated)

    def delete_transaction(self, identity: Identity, transaction_id: int) -> None:
        """
        Reverse a transaction's effect on its account, then remove it.

        Raises:
            NotFound: Transaction missing or not owned
            InvalidInput: Reversed balance is out of range
        """
        with self.store.atomic():
            transaction = self.store.transactions.find_owned(transaction_id, identity.user_id)
            if transaction is None:
                raise NotFound("Transaction not found")
            balances = self._plan_balances([
                (transaction.account_id, -signed_amount(transaction.type, transaction.amount), transaction.id),
            ])
            self._commit_balances(balances)
            self.store.transactions.delete(transaction_id)

        logger.info(
            "Transaction deleted",
            extra={"transaction_id": transaction_id, "account_id": transaction.account_id},
        )

    # ------------------------------------------------------------------
    # Savings goals
    # ------------------------------------------------------------------

    def create_goal(self, identity: Identity, payload: SavingsGoalCreate) -> SavingsGoal:
        current = Decimal("0.00")
        return self.store.savings_goals.create(
            user_id=identity.user_id,
            current_amount=current,
            is_achieved=current >= payload.target_amount,
            **payload.model_dump(),
        )

    def update_goal(self, identity: Identity, goal_id: int, payload: SavingsGoalUpdate) -> SavingsGoal:
        """
        Edit a goal directly. ``current_amount`` is never touched here;
        ``is_achieved`` is recomputed against the resulting target.

        Raises:
            NotFound: Goal missing or not owned
        """
        with self.store.atomic():
            goal = self.store.savings_goals.find_owned(goal_id, identity.user_id)
            if goal is None:
                raise NotFound("Savings goal not found")

            changes = payload.model_dump(exclude_unset=True)
            for key in ("name", "target_amount", "color"):
                if changes.get(key) is None:
                    changes.pop(key, None)
            target = changes.get("target_amount", goal.target_amount)
            changes["is_achieved"] = goal.current_amount >= target
            return self.store.savings_goals.update(goal_id, **changes)

    def contribute(self, identity: Identity, payload: ContributionCreate) -> GoalContribution:
        """
        Append a contribution and fold its amount into the goal.

        No account balance is touched and no linked transaction is created.

        Raises:
            InvalidReference: Goal missing or not owned
            InvalidInput: Resulting goal total is out of range
        """
        with self.store.atomic():
            goal = self.store.savings_goals.find_owned(payload.goal_id, identity.user_id)
            if goal is None:
                raise InvalidReference("Invalid savings goal")

            current = _checked_money(goal.current_amount + payload.amount)
            contribution = self.store.goal_contributions.create(
                transaction_id=None,
                **payload.model_dump(),
            )
            goal = self.store.savings_goals.update(
                goal.id,
                current_amount=current,
                is_achieved=current >= goal.target_amount,
            )

        logger.info(
            "Goal contribution recorded",
            extra={"goal_id": goal.id, "contribution_id": contribution.id,
                   "amount": str(contribution.amount), "current_amount": str(goal.current_amount),
                   "is_achieved": goal.is_achieved},
        )
        return contribution

    def list_contributions(self, identity: Identity, goal_id: int) -> List[GoalContribution]:
        goal = self.store.savings_goals.find_owned(goal_id, identity.user_id)
        if goal is None:
            raise NotFound("Savings goal not found")
        return self.store.goal_contributions.list(goal_id=goal_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _owned_account(self, identity: Identity, account_id: int) -> Account:
        account = self.store.accounts.find_owned(account_id, identity.user_id)
        if account is None:
            raise InvalidReference("Invalid account")
        return account

    def _owned_category(self, identity: Identity, category_id: int) -> Category:
        category = self.store.categories.find_owned(category_id, identity.user_id)
        if category is None:
            raise InvalidReference("Invalid category")
        return category

    def _plan_balances(
        self,
        effects: List[Tuple[int, Decimal, Optional[int]]],
    ) -> Dict[int, Decimal]:
        """
        Resulting balance per account after applying ``(account_id, delta,
        transaction_id)`` effects in order. Nothing is written.

        A dangling account is skipped with a warning.

        Raises:
            InvalidInput: A resulting balance cannot be held in cents
        """
        balances: Dict[int, Decimal] = {}
        for account_id, delta, transaction_id in effects:
            if account_id not in balances:
                account = self.store.accounts.get(account_id)
                if account is None:
                    logger.warning(
                        "Account missing while applying transaction; balance left unchanged",
                        extra={"account_id": account_id, "transaction_id": transaction_id,
                               "delta": str(delta)},
                    )
                    continue
                balances[account_id] = account.balance
            balances[account_id] += delta
        return {account_id: _checked_money(balance) for account_id, balance in balances.items()}

    def _commit_balances(self, balances: Dict[int, Decimal]) -> Dict[int, Account]:
        return {
            account_id: self.store.accounts.update(account_id, balance=balance)
            for account_id, balance in balances.items()
        }

    def _detail(self, transaction: Transaction) -> TransactionWithDetails:
        return with_details(
            transaction,
            self.store.accounts.get(transaction.account_id),
            self.store.categories.get(transaction.category_id),
        )
