"""Mini README: Domain types, reference data and errors for MessMate.

The records here carry no behaviour beyond serialisation; every state
transition lives in :mod:`messmate.ledger`.
"""

from .catalog import (
    DEFAULT_MENU_ITEMS,
    DEFAULT_PLANS,
    DEFAULT_USERS,
    EXPENSE_CATEGORIES,
    default_state,
)
from .exceptions import (
    InvalidAmountError,
    InvalidCredentialsError,
    InvalidDescriptionError,
    InvalidDurationError,
    InvalidQuantityError,
    MessMateError,
    PersistenceFailedError,
    UnknownCustomerError,
    UnknownMenuItemError,
    UnknownPlanError,
)
from .models import (
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
    UserRole,
)

__all__ = [
    "ApplicationState",
    "Customer",
    "DEFAULT_MENU_ITEMS",
    "DEFAULT_PLANS",
    "DEFAULT_USERS",
    "EXPENSE_CATEGORIES",
    "InvalidAmountError",
    "InvalidCredentialsError",
    "InvalidDescriptionError",
    "InvalidDurationError",
    "InvalidQuantityError",
    "MenuItem",
    "MessMateError",
    "NO_PHONE",
    "PersistenceFailedError",
    "Plan",
    "Portion",
    "ReminderSettings",
    "Transaction",
    "TransactionType",
    "UnknownCustomerError",
    "UnknownMenuItemError",
    "UnknownPlanError",
    "User",
    "UserRole",
    "default_state",
]
