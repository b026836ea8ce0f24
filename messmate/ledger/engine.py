"""Mini README: The ledger engine owning the application state.

Structure:
    * MealQuote - allocation of a meal request between allowance and payable units.
    * MealRecord - outcome of a recorded meal (updated customer plus new entries).
    * LedgerEngine - validated mutations, derived queries and persistence hook.

Every mutation validates all of its inputs before touching state and then
commits its changes together, so a rejected call leaves the state exactly as
it was. When a store is attached the whole document is rewritten after each
successful mutation; a failed write keeps the in-memory change and raises
``PersistenceFailedError`` carrying the operation's result.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union
from uuid import uuid4

from ..auth import authenticate
from ..clock import Clock, SystemClock
from ..domain.exceptions import (
    InvalidAmountError,
    InvalidDescriptionError,
    InvalidDurationError,
    InvalidQuantityError,
    PersistenceFailedError,
    UnknownCustomerError,
    UnknownMenuItemError,
    UnknownPlanError,
)
from ..domain.models import (
    NO_PHONE,
    ApplicationState,
    Customer,
    MenuItem,
    Plan,
    Portion,
    ReminderSettings,
    Transaction,
    TransactionType,
    User,
)
from ..logging_utils import get_logger
from ..persistence.store import DocumentStore
from .alerts import RenewalAlert, pending_payments, renewal_alerts
from .reports import DashboardSummary, summarise_month

LOGGER = get_logger(__name__)

MEAL_PLAN_CATEGORY = "Meal Plan"
MEAL_EXTRA_CATEGORY = "Meal Extra"

_R = TypeVar("_R")


def _default_id() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class MealQuote:
    """How a meal request splits between the prepaid allowance and payment."""

    customer_id: str
    menu_item: MenuItem
    portion: Portion
    quantity: int
    unit_price: float
    covered: int

    @property
    def payable_units(self) -> int:
        return self.quantity - self.covered

    @property
    def payable_amount(self) -> float:
        return self.payable_units * self.unit_price

    @property
    def total_cost(self) -> float:
        return self.quantity * self.unit_price

    @property
    def description(self) -> str:
        return f"{self.menu_item.name} ({self.portion.value}) x{self.quantity}"

    def as_dict(self) -> dict:
        return {
            "customerId": self.customer_id,
            "menuItemId": self.menu_item.id,
            "portion": self.portion.value,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "covered": self.covered,
            "payableUnits": self.payable_units,
            "payableAmount": self.payable_amount,
            "totalCost": self.total_cost,
        }


@dataclass(frozen=True, slots=True)
class MealRecord:
    customer: Customer
    quote: MealQuote
    transactions: Tuple[Transaction, ...]


class LedgerEngine:
    """Apply ledger operations to an owned ``ApplicationState``."""

    def __init__(
        self,
        state: ApplicationState,
        *,
        store: Optional[DocumentStore] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[Callable[[], str]] = None,
        users: Optional[Iterable[User]] = None,
    ) -> None:
        self._state = state
        self._store = store
        self._clock = clock or SystemClock()
        self._new_id = id_factory or _default_id
        self._users = list(users) if users is not None else None
        LOGGER.debug(
            "Ledger engine initialised with %s customers and %s transactions",
            len(state.customers),
            len(state.transactions),
        )

    @classmethod
    def from_store(cls, store: DocumentStore, **kwargs) -> "LedgerEngine":
        """Load the persisted document and bind the engine to the same store."""

        return cls(store.load(), store=store, **kwargs)

    @property
    def state(self) -> ApplicationState:
        return self._state

    def now(self) -> datetime:
        return self._clock.now()

    # ------------------------------------------------------------------ lookups

    def get_customer(self, customer_id: str) -> Customer:
        for customer in self._state.customers:
            if customer.id == customer_id:
                return customer
        raise UnknownCustomerError(f"Customer {customer_id} not found")

    def get_plan(self, plan_id: str) -> Plan:
        for plan in self._state.plans:
            if plan.id == plan_id:
                return plan
        raise UnknownPlanError(f"Plan {plan_id} not found")

    def get_menu_item(self, menu_item_id: str) -> MenuItem:
        for item in self._state.menu_items:
            if item.id == menu_item_id:
                return item
        raise UnknownMenuItemError(f"Menu item {menu_item_id} not found")

    # ---------------------------------------------------------------- mutations

    def enroll(self, name: str, phone: Optional[str], plan_id: str) -> Optional[Customer]:
        """Create a customer on a plan and book the upfront plan payment.

        A blank name is a no-op returning ``None``.
        """

        clean_name = (name or "").strip()
        if not clean_name:
            LOGGER.warning("Enrollment skipped: customer name is blank")
            return None
        plan = self.get_plan(plan_id)

        now = self.now()
        customer = Customer(
            id=self._new_id(),
            name=clean_name,
            phone=(phone or "").strip() or NO_PHONE,
            plan_id=plan.id,
            start_date=now,
            expiry_date=now + timedelta(days=plan.validity_days),
            meals_remaining=plan.total_meals,
        )
        subscription = Transaction(
            id=self._new_id(),
            type=TransactionType.SUBSCRIPTION,
            amount=plan.cost,
            date=now,
            description=f"New Plan: {customer.name}",
            customer_id=customer.id,
        )
        self._state.customers = [*self._state.customers, customer]
        self._state.transactions = [*self._state.transactions, subscription]
        LOGGER.info(
            "Enrolled customer %s on plan %s (%s meals, expires %s)",
            customer.id,
            plan.id,
            customer.meals_remaining,
            customer.expiry_date.date().isoformat(),
        )
        return self._commit(customer)

    def quote_meal(
        self,
        customer_id: str,
        menu_item_id: str,
        portion: Union[Portion, str],
        quantity: int,
    ) -> MealQuote:
        """Preview the allowance/payable split without changing anything."""

        customer = self.get_customer(customer_id)
        item = self.get_menu_item(menu_item_id)
        chosen_portion = portion if isinstance(portion, Portion) else Portion.from_str(portion)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError(f"Quantity must be a positive integer, got {quantity!r}")
        return MealQuote(
            customer_id=customer.id,
            menu_item=item,
            portion=chosen_portion,
            quantity=quantity,
            unit_price=item.price_for(chosen_portion),
            covered=min(customer.meals_remaining, quantity),
        )

    def record_meal(
        self,
        customer_id: str,
        menu_item_id: str,
        portion: Union[Portion, str],
        quantity: int,
    ) -> MealRecord:
        """Consume the allowance first and bill whatever exceeds it."""

        quote = self.quote_meal(customer_id, menu_item_id, portion, quantity)
        customer = self.get_customer(customer_id)
        now = self.now()

        entries: List[Transaction] = []
        if quote.covered > 0:
            entries.append(
                Transaction(
                    id=self._new_id(),
                    type=TransactionType.USAGE,
                    amount=0.0,
                    date=now,
                    description=f"{quote.description} (Plan)",
                    category=MEAL_PLAN_CATEGORY,
                    customer_id=customer.id,
                )
            )
        if quote.payable_amount > 0:
            entries.append(
                Transaction(
                    id=self._new_id(),
                    type=TransactionType.INCOME,
                    amount=quote.payable_amount,
                    date=now,
                    description=f"{quote.description} (Extra)",
                    category=MEAL_EXTRA_CATEGORY,
                    customer_id=customer.id,
                )
            )

        updated = replace(
            customer,
            meals_remaining=customer.meals_remaining - quote.covered,
            balance=customer.balance + quote.payable_amount,
        )
        self._replace_customer(updated)
        self._state.transactions = [*self._state.transactions, *entries]
        LOGGER.info(
            "Recorded meal for %s: %s covered, %s payable (%.2f)",
            customer.id,
            quote.covered,
            quote.payable_units,
            quote.payable_amount,
        )
        return self._commit(MealRecord(customer=updated, quote=quote, transactions=tuple(entries)))

    def add_break(self, customer_id: str, days: int) -> Customer:
        """Push a customer's expiry forward by ``days`` calendar days."""

        customer = self.get_customer(customer_id)
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise InvalidDurationError(f"Break must be a positive number of days, got {days!r}")

        updated = replace(
            customer,
            expiry_date=customer.expiry_date + timedelta(days=days),
            total_break_days=customer.total_break_days + days,
        )
        self._replace_customer(updated)
        LOGGER.info(
            "Granted %s break days to %s; expiry moved to %s",
            days,
            customer.id,
            updated.expiry_date.date().isoformat(),
        )
        return self._commit(updated)

    def add_transaction(
        self,
        transaction_type: Union[TransactionType, str],
        amount: float,
        description: str,
        category: Optional[str] = None,
    ) -> Transaction:
        """Log a free-form cash movement (income or expense)."""

        kind = (
            transaction_type
            if isinstance(transaction_type, TransactionType)
            else TransactionType.from_str(transaction_type)
        )
        if kind in (TransactionType.USAGE, TransactionType.SUBSCRIPTION):
            raise ValueError(f"{kind.value} entries are generated by the ledger, not logged manually")
        if not amount > 0:
            raise InvalidAmountError(f"Amount must be greater than zero, got {amount!r}")
        clean_description = (description or "").strip()
        if not clean_description:
            raise InvalidDescriptionError("Description is required")

        entry = Transaction(
            id=self._new_id(),
            type=kind,
            amount=float(amount),
            date=self.now(),
            description=clean_description,
            category=(category or None) if kind is TransactionType.EXPENSE else None,
        )
        self._state.transactions = [*self._state.transactions, entry]
        LOGGER.info("Logged %s of %.2f: %s", kind.value, entry.amount, entry.description)
        return self._commit(entry)

    def update_settings(
        self,
        *,
        subscription_days: Optional[int] = None,
        meal_threshold: Optional[int] = None,
        balance_threshold: Optional[float] = None,
    ) -> ReminderSettings:
        """Merge a partial update, then clamp every field to its floor."""

        current = self._state.settings
        merged = ReminderSettings(
            subscription_days=max(
                1, int(current.subscription_days if subscription_days is None else subscription_days)
            ),
            meal_threshold=max(
                0, int(current.meal_threshold if meal_threshold is None else meal_threshold)
            ),
            balance_threshold=max(
                0.0,
                float(current.balance_threshold if balance_threshold is None else balance_threshold),
            ),
        )
        self._state.settings = merged
        LOGGER.info("Settings updated: %s", merged.as_dict())
        return self._commit(merged)

    def login(self, username: str, pin: str) -> User:
        user = authenticate(username, pin, self._users)
        self._state.current_user = user
        return self._commit(user)

    def logout(self) -> None:
        if self._state.current_user is not None:
            LOGGER.info("User %s logged out", self._state.current_user.username)
        self._state.current_user = None
        self._commit(None)

    def toggle_dark_mode(self) -> bool:
        self._state.dark_mode = not self._state.dark_mode
        return self._commit(self._state.dark_mode)

    # ------------------------------------------------------------------ queries

    def renewal_alerts(self) -> List[RenewalAlert]:
        return renewal_alerts(self._state.customers, self._state.settings, self.now())

    def pending_payments(self) -> List[Customer]:
        return pending_payments(self._state.customers, self._state.settings)

    def dashboard(self) -> DashboardSummary:
        return summarise_month(self._state.transactions, self._state.customers, self.now())

    # -------------------------------------------------------------- persistence

    def persist(self) -> None:
        """Write the current document to the attached store, if any."""

        if self._store is None:
            return
        self._store.save(self._state)

    def _commit(self, result: _R) -> _R:
        try:
            self.persist()
        except PersistenceFailedError as error:
            raise PersistenceFailedError(str(error), result=result) from error
        return result

    def _replace_customer(self, updated: Customer) -> None:
        self._state.customers = [
            updated if customer.id == updated.id else customer
            for customer in self._state.customers
        ]
