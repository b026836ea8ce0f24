"""Mini README: Read-only summaries for dashboards and listings.

Structure:
    * classify_transaction - maps every TransactionType onto a cash-flow bucket.
    * DashboardSummary / summarise_month - month-to-date totals.
    * finance_log - cash entries newest first.
    * search_customers - name/phone filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List

from ..domain.models import Customer, Transaction, TransactionType

INFLOW = "inflow"
OUTFLOW = "outflow"
NON_CASH = "non_cash"


def classify_transaction(transaction_type: TransactionType) -> str:
    """Return the cash-flow bucket for a transaction type.

    New members of ``TransactionType`` must be added here; an unmapped type
    raises instead of silently dropping out of the totals.
    """

    if transaction_type in (TransactionType.INCOME, TransactionType.SUBSCRIPTION):
        return INFLOW
    if transaction_type is TransactionType.EXPENSE:
        return OUTFLOW
    if transaction_type is TransactionType.USAGE:
        return NON_CASH
    raise ValueError(f"Unclassified transaction type: {transaction_type}")


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    income_this_month: float
    expense_this_month: float
    active_customers: int

    @property
    def net_this_month(self) -> float:
        return self.income_this_month - self.expense_this_month

    def as_dict(self) -> dict:
        return {
            "incomeThisMonth": self.income_this_month,
            "expenseThisMonth": self.expense_this_month,
            "netThisMonth": self.net_this_month,
            "activeCustomers": self.active_customers,
        }


def summarise_month(
    transactions: Iterable[Transaction], customers: Iterable[Customer], now: datetime
) -> DashboardSummary:
    """Aggregate month-to-date cash flow and the active customer count."""

    # Month boundaries are UTC.
    month = now.astimezone(timezone.utc)
    income = 0.0
    expense = 0.0
    for transaction in transactions:
        booked = transaction.date.astimezone(timezone.utc)
        if (booked.year, booked.month) != (month.year, month.month):
            continue
        bucket = classify_transaction(transaction.type)
        if bucket == INFLOW:
            income += transaction.amount
        elif bucket == OUTFLOW:
            expense += transaction.amount

    active = sum(
        1 for customer in customers if customer.is_active and customer.expiry_date >= now
    )
    return DashboardSummary(
        income_this_month=income,
        expense_this_month=expense,
        active_customers=active,
    )


def finance_log(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Return cash-moving entries in reverse insertion order."""

    return [
        transaction
        for transaction in reversed(list(transactions))
        if classify_transaction(transaction.type) != NON_CASH
    ]


def search_customers(customers: Iterable[Customer], query: str = "") -> List[Customer]:
    needle = query.strip()
    if not needle:
        return list(customers)
    lowered = needle.lower()
    return [
        customer
        for customer in customers
        if lowered in customer.name.lower() or needle in customer.phone
    ]
