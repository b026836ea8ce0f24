"""Mini README: Built-in reference data seeded into a fresh document.

Structure:
    * DEFAULT_PLANS / DEFAULT_MENU_ITEMS - catalogue used when no document exists.
    * EXPENSE_CATEGORIES - suggested categories for expense entries.
    * DEFAULT_USERS - static operator list for the login lookup.
    * default_state - factory for a pristine ApplicationState.
"""

from __future__ import annotations

from typing import List

from .models import ApplicationState, MenuItem, Plan, ReminderSettings, User, UserRole

DEFAULT_PLANS: List[Plan] = [
    Plan(id="plan_1", name="Full Month Mess", cost=3500.0, total_meals=60, validity_days=30),
    Plan(id="plan_2", name="Single Meal Monthly", cost=2000.0, total_meals=30, validity_days=30),
    Plan(id="plan_3", name="15 Days Trial", cost=1800.0, total_meals=30, validity_days=15),
]

DEFAULT_MENU_ITEMS: List[MenuItem] = [
    MenuItem(id="m1", name="Veg Thali", price_full=80.0, price_half=50.0),
    MenuItem(id="m2", name="Chicken Thali", price_full=150.0, price_half=100.0),
    MenuItem(id="m3", name="Egg Rice", price_full=90.0, price_half=60.0),
    MenuItem(id="m4", name="Curd Rice", price_full=60.0, price_half=40.0),
    MenuItem(id="m5", name="Special Sunday", price_full=200.0, price_half=120.0),
]

EXPENSE_CATEGORIES: List[str] = [
    "Vegetables",
    "Rice & Wheat",
    "Meat & Dairy",
    "Oil & Spices",
    "Gas Cylinder",
    "Rent/Electricity",
    "Others",
]

# Plain demo PINs, matched verbatim.
DEFAULT_USERS: List[User] = [
    User(username="admin", pin="1234", role=UserRole.OWNER),
    User(username="staff", pin="0000", role=UserRole.STAFF),
]


def default_state() -> ApplicationState:
    """Return a fresh document seeded with the built-in catalogue."""

    return ApplicationState(
        plans=list(DEFAULT_PLANS),
        menu_items=list(DEFAULT_MENU_ITEMS),
        settings=ReminderSettings(),
    )
