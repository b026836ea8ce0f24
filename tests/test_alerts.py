"""Mini README: Tests for the renewal and pending-payment alert queries.

These tests pin ``now`` and build customers relative to it so the due
conditions, urgency ordering and thresholds can be asserted exactly.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from messmate.domain import Customer, ReminderSettings
from messmate.ledger import days_to_expiry, pending_payments, renewal_alerts

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
SETTINGS = ReminderSettings(subscription_days=3, meal_threshold=5, balance_threshold=1000.0)


def _customer(
    customer_id: str,
    *,
    days: float = 30,
    meals: int = 40,
    balance: float = 0.0,
    active: bool = True,
) -> Customer:
    return Customer(
        id=customer_id,
        name=customer_id.title(),
        phone="000",
        plan_id="plan_1",
        start_date=NOW - timedelta(days=10),
        expiry_date=NOW + timedelta(days=days),
        meals_remaining=meals,
        balance=balance,
        is_active=active,
    )


def test_days_to_expiry_rounds_up_partial_days() -> None:
    assert days_to_expiry(_customer("a", days=10), NOW) == 10
    assert days_to_expiry(_customer("b", days=1.5), NOW) == 2
    assert days_to_expiry(_customer("c", days=-2.5), NOW) == -2


def test_low_meals_trigger_renewal_with_combined_score() -> None:
    """Ten days out but only two meals left: due, with urgency score 12."""

    (alert,) = renewal_alerts([_customer("asha", days=10, meals=2)], SETTINGS, NOW)

    assert alert.customer.id == "asha"
    assert alert.days_to_expiry == 10
    assert alert.urgency_score == 12


def test_renewals_only_include_due_active_customers() -> None:
    customers = [
        _customer("comfortable", days=20, meals=30),
        _customer("near_expiry", days=3, meals=30),
        _customer("inactive", days=1, meals=0, active=False),
        _customer("at_meal_threshold", days=20, meals=5),
    ]

    alerts = renewal_alerts(customers, SETTINGS, NOW)

    assert [alert.customer.id for alert in alerts] == ["at_meal_threshold", "near_expiry"]
    assert [alert.urgency_score for alert in alerts] == [25, 33]


def test_renewals_sort_expired_first_and_keep_ties_stable() -> None:
    customers = [
        _customer("tie_one", days=2, meals=4),
        _customer("expired", days=-3, meals=1),
        _customer("tie_two", days=4, meals=2),
        _customer("urgent", days=1, meals=0),
    ]

    alerts = renewal_alerts(customers, SETTINGS, NOW)

    assert [alert.customer.id for alert in alerts] == ["expired", "urgent", "tie_one", "tie_two"]
    assert alerts[0].urgency_score == -2


def test_renewals_follow_the_clock() -> None:
    customer = _customer("later", days=6, meals=30)

    assert renewal_alerts([customer], SETTINGS, NOW) == []
    assert len(renewal_alerts([customer], SETTINGS, NOW + timedelta(days=3))) == 1


def test_pending_payments_descending_and_threshold_exclusive() -> None:
    customers = [
        _customer("small", balance=1200.0),
        _customer("at_threshold", balance=1000.0),
        _customer("large", balance=4800.0),
        _customer("credit", balance=-300.0),
        _customer("small_twin", balance=1200.0, active=False),
    ]

    owing = pending_payments(customers, SETTINGS)

    assert [customer.id for customer in owing] == ["large", "small", "small_twin"]
