"""Mini README: Tests for the CSV export layout."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from messmate.domain import Customer, Transaction, TransactionType, default_state
from messmate.export import CsvExporter, export_filename, render_csv

WHEN = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


def _records():
    transactions = [
        Transaction(
            id="t1",
            type=TransactionType.EXPENSE,
            amount=250.0,
            date=WHEN,
            description='Onions "red"',
            category="Vegetables",
        ),
        Transaction(id="t2", type=TransactionType.INCOME, amount=12.5, date=WHEN, description="Tip"),
    ]
    customers = [
        Customer(
            id="c1",
            name="Asha, Rao",
            phone="98765",
            plan_id="plan_1",
            start_date=WHEN,
            expiry_date=WHEN,
            meals_remaining=3,
            balance=300.0,
        )
    ]
    return transactions, customers


def test_render_csv_layout() -> None:
    """Both sections appear in order with free text quoted."""

    transactions, customers = _records()

    assert render_csv(transactions, customers).splitlines() == [
        "Type,Date,Category,Amount,Description",
        'EXPENSE,2024-06-01T09:30:00+00:00,Vegetables,250,"Onions ""red"""',
        'INCOME,2024-06-01T09:30:00+00:00,-,12.5,"Tip"',
        "",
        "",
        "Customers",
        "Name,Phone,Meals Remaining,Balance",
        '"Asha, Rao",98765,3,300',
    ]


def test_exporter_writes_file(tmp_path: Path) -> None:
    state = default_state()
    state.transactions, state.customers = _records()
    destination = tmp_path / "exports" / export_filename(WHEN)

    written = CsvExporter().export(state, destination)

    assert written.name == "messmate_export_2024-06-01.csv"
    assert written.read_text(encoding="utf-8").startswith("Type,Date,Category,Amount,Description\n")
