"""Mini README: Accounting and alerting engine for MessMate.

This package owns every state transition (enrollment, meal billing, breaks,
cash entries, settings) and the derived alert queries. Front ends call the
``LedgerEngine``; the pure helpers in ``alerts`` and ``reports`` can also be
used directly on any customer/transaction collection.
"""

from .alerts import RenewalAlert, days_to_expiry, pending_payments, renewal_alerts
from .engine import LedgerEngine, MealQuote, MealRecord
from .reports import DashboardSummary, finance_log, search_customers, summarise_month

__all__ = [
    "DashboardSummary",
    "LedgerEngine",
    "MealQuote",
    "MealRecord",
    "RenewalAlert",
    "days_to_expiry",
    "finance_log",
    "pending_payments",
    "renewal_alerts",
    "search_customers",
    "summarise_month",
]
