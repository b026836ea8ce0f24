"""Mini README: Domain records for the MessMate ledger.

Structure:
    * TransactionType / Portion / UserRole - enumerations of fixed choices.
    * Plan, MenuItem - immutable reference data.
    * Customer - subscriber with allowance, balance and expiry.
    * Transaction - immutable, append-only ledger entry.
    * ReminderSettings - alert thresholds.
    * User - authenticated operator.
    * ApplicationState - aggregate root persisted as a single document.

Each record round-trips through ``as_dict``/``from_dict`` using the
camelCase keys of the persisted document. Timestamps are timezone-aware UTC.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

NO_PHONE = "No Phone"


class TransactionType(str, Enum):
    """Enumerate the supported ledger entry kinds."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    SUBSCRIPTION = "SUBSCRIPTION"
    USAGE = "USAGE"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


class Portion(str, Enum):
    HALF = "half"
    FULL = "full"

    @classmethod
    def from_str(cls, value: str) -> "Portion":
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported portion: {value}") from error


class UserRole(str, Enum):
    OWNER = "OWNER"
    STAFF = "STAFF"


def parse_timestamp(value: object) -> datetime:
    """Parse ISO strings (``Z`` suffix and date-only allowed) into aware UTC datetimes."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError("Timestamps must be ISO strings or date/datetime instances.")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


@dataclass(frozen=True, slots=True)
class Plan:
    """Purchasable subscription template."""

    id: str
    name: str
    cost: float
    total_meals: int
    validity_days: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cost": self.cost,
            "totalMeals": self.total_meals,
            "validityDays": self.validity_days,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Plan":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            cost=float(payload["cost"]),
            total_meals=int(payload["totalMeals"]),
            validity_days=int(payload["validityDays"]),
        )


@dataclass(frozen=True, slots=True)
class MenuItem:
    """Priced food item with full and half portions."""

    id: str
    name: str
    price_full: float
    price_half: float

    def price_for(self, portion: Portion) -> float:
        return self.price_full if portion is Portion.FULL else self.price_half

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "priceFull": self.price_full,
            "priceHalf": self.price_half,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MenuItem":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            price_full=float(payload["priceFull"]),
            price_half=float(payload["priceHalf"]),
        )


@dataclass(slots=True)
class Customer:
    """A meal-plan subscriber.

    ``balance`` is positive when the customer owes money and negative when
    they hold pre-credit. ``meals_remaining`` never drops below zero.
    """

    id: str
    name: str
    phone: str
    plan_id: str
    start_date: datetime
    expiry_date: datetime
    meals_remaining: int
    balance: float = 0.0
    is_active: bool = True
    total_break_days: int = 0
    is_postpaid: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "planId": self.plan_id,
            "startDate": format_timestamp(self.start_date),
            "expiryDate": format_timestamp(self.expiry_date),
            "mealsRemaining": self.meals_remaining,
            "isPostpaid": self.is_postpaid,
            "balance": self.balance,
            "isActive": self.is_active,
            "totalBreakDays": self.total_break_days,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Customer":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            phone=str(payload.get("phone") or NO_PHONE),
            plan_id=str(payload["planId"]),
            start_date=parse_timestamp(payload["startDate"]),
            expiry_date=parse_timestamp(payload["expiryDate"]),
            meals_remaining=int(payload.get("mealsRemaining", 0)),
            balance=float(payload.get("balance", 0.0)),
            is_active=bool(payload.get("isActive", True)),
            total_break_days=int(payload.get("totalBreakDays") or 0),
            is_postpaid=bool(payload.get("isPostpaid", False)),
        )


@dataclass(frozen=True, slots=True)
class Transaction:
    """Append-only ledger entry. USAGE entries always carry amount 0."""

    id: str
    type: TransactionType
    amount: float
    date: datetime
    description: str
    category: Optional[str] = None
    customer_id: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "amount": self.amount,
            "date": format_timestamp(self.date),
            "description": self.description,
        }
        if self.category is not None:
            payload["category"] = self.category
        if self.customer_id is not None:
            payload["customerId"] = self.customer_id
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(payload["id"]),
            type=TransactionType.from_str(str(payload["type"])),
            amount=float(payload["amount"]),
            date=parse_timestamp(payload["date"]),
            description=str(payload.get("description", "")),
            category=payload.get("category"),
            customer_id=payload.get("customerId"),
        )


@dataclass(slots=True)
class ReminderSettings:
    """Alert thresholds: days before expiry, low meals, overdue balance."""

    subscription_days: int = 3
    meal_threshold: int = 5
    balance_threshold: float = 1000.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "subscriptionDays": self.subscription_days,
            "mealThreshold": self.meal_threshold,
            "balanceThreshold": self.balance_threshold,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ReminderSettings":
        return cls(
            subscription_days=int(payload["subscriptionDays"]),
            meal_threshold=int(payload["mealThreshold"]),
            balance_threshold=float(payload["balanceThreshold"]),
        )


@dataclass(frozen=True, slots=True)
class User:
    username: str
    pin: str
    role: UserRole

    def as_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "pinHash": self.pin, "role": self.role.value}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "User":
        return cls(
            username=str(payload["username"]),
            pin=str(payload.get("pinHash", "")),
            role=UserRole(str(payload["role"]).upper()),
        )


@dataclass(slots=True)
class ApplicationState:
    """Aggregate root persisted as one document."""

    plans: List[Plan]
    menu_items: List[MenuItem]
    settings: ReminderSettings = field(default_factory=ReminderSettings)
    customers: List[Customer] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    current_user: Optional[User] = None
    dark_mode: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "currentUser": self.current_user.as_dict() if self.current_user else None,
            "customers": [customer.as_dict() for customer in self.customers],
            "transactions": [transaction.as_dict() for transaction in self.transactions],
            "plans": [plan.as_dict() for plan in self.plans],
            "settings": self.settings.as_dict(),
            "darkMode": self.dark_mode,
            "menuItems": [item.as_dict() for item in self.menu_items],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ApplicationState":
        current_user = payload.get("currentUser")
        return cls(
            plans=[Plan.from_dict(entry) for entry in payload["plans"]],
            menu_items=[MenuItem.from_dict(entry) for entry in payload["menuItems"]],
            settings=ReminderSettings.from_dict(payload["settings"]),
            customers=[Customer.from_dict(entry) for entry in payload["customers"]],
            transactions=[Transaction.from_dict(entry) for entry in payload["transactions"]],
            current_user=User.from_dict(current_user) if current_user else None,
            dark_mode=bool(payload.get("darkMode", False)),
        )
