"""Mini README: Derived alert queries over customers.

Structure:
    * days_to_expiry - whole days (rounded up) until a customer's expiry.
    * RenewalAlert - a due customer with its urgency score.
    * renewal_alerts - active customers near expiry or low on meals.
    * pending_payments - customers whose balance exceeds the threshold.

The queries are pure and are recomputed on every read: expiry proximity
depends on ``now``, so results go stale with the passage of time alone.
The urgency score is days to expiry plus meals remaining; lower is more
urgent and expired customers go negative.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from ..domain.models import Customer, ReminderSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_SECONDS_PER_DAY = 86_400


def days_to_expiry(customer: Customer, now: datetime) -> int:
    """Return ``ceil((expiry - now) / 1 day)``; negative once expired."""

    delta = customer.expiry_date - now
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


@dataclass(frozen=True, slots=True)
class RenewalAlert:
    """Customer due for renewal along with the values used to rank it."""

    customer: Customer
    days_to_expiry: int
    urgency_score: int

    def as_dict(self) -> dict:
        return {
            "customerId": self.customer.id,
            "name": self.customer.name,
            "phone": self.customer.phone,
            "mealsRemaining": self.customer.meals_remaining,
            "daysToExpiry": self.days_to_expiry,
            "urgencyScore": self.urgency_score,
        }


def renewal_alerts(
    customers: Iterable[Customer], settings: ReminderSettings, now: datetime
) -> List[RenewalAlert]:
    """Return due active customers, most urgent (lowest score) first."""

    due: List[RenewalAlert] = []
    for customer in customers:
        if not customer.is_active:
            continue
        remaining_days = days_to_expiry(customer, now)
        date_near = remaining_days <= settings.subscription_days
        meals_low = customer.meals_remaining <= settings.meal_threshold
        if date_near or meals_low:
            due.append(
                RenewalAlert(
                    customer=customer,
                    days_to_expiry=remaining_days,
                    urgency_score=remaining_days + customer.meals_remaining,
                )
            )
    # sorted() is stable, so ties keep list order.
    due = sorted(due, key=lambda alert: alert.urgency_score)
    LOGGER.debug("Computed %s renewal alerts", len(due))
    return due


def pending_payments(
    customers: Iterable[Customer], settings: ReminderSettings
) -> List[Customer]:
    """Return customers owing more than the threshold, largest debt first."""

    owing = [customer for customer in customers if customer.balance > settings.balance_threshold]
    owing = sorted(owing, key=lambda customer: customer.balance, reverse=True)
    LOGGER.debug("Computed %s pending payments", len(owing))
    return owing
