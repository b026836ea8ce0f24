"""Mini README: CSV export of the ledger and customer list.

Structure:
    * render_csv - builds the two-section export document as text.
    * export_filename - dated default filename for downloads.
    * CsvExporter - writes the export for an ApplicationState to disk.

The layout is fixed for compatibility with spreadsheets already built on
earlier exports: a transaction table, two blank lines, a ``Customers``
marker row, then the customer table. Free-text fields (description, name)
are always double-quoted.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from ..domain.models import (
    ApplicationState,
    Customer,
    Transaction,
    format_timestamp,
)
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

TRANSACTION_HEADER = "Type,Date,Category,Amount,Description"
CUSTOMER_HEADER = "Name,Phone,Meals Remaining,Balance"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _transaction_row(transaction: Transaction) -> str:
    return ",".join(
        [
            transaction.type.value,
            format_timestamp(transaction.date),
            transaction.category or "-",
            _number(transaction.amount),
            _quote(transaction.description),
        ]
    )


def _customer_row(customer: Customer) -> str:
    return ",".join(
        [
            _quote(customer.name),
            customer.phone,
            str(customer.meals_remaining),
            _number(customer.balance),
        ]
    )


def render_csv(transactions: Iterable[Transaction], customers: Iterable[Customer]) -> str:
    """Return the export document for the given records."""

    lines: List[str] = [TRANSACTION_HEADER]
    lines.extend(_transaction_row(transaction) for transaction in transactions)
    lines.extend(["", "", "Customers", CUSTOMER_HEADER])
    lines.extend(_customer_row(customer) for customer in customers)
    return "\n".join(lines) + "\n"


def export_filename(now: datetime) -> str:
    return f"messmate_export_{now.date().isoformat()}.csv"


class CsvExporter:
    """Persist CSV exports of the application document."""

    def export(self, state: ApplicationState, destination: Path) -> Path:
        """Write the export for ``state`` to ``destination``."""

        LOGGER.info(
            "Exporting %s transactions and %s customers to %s",
            len(state.transactions),
            len(state.customers),
            destination,
        )
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(render_csv(state.transactions, state.customers), encoding="utf-8")
        return destination
