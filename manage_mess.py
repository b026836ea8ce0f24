"""Mini README: Command-line entry point for the MessMate ledger.

This script exposes a Typer CLI to run the JSON front end and to perform
day-to-day ledger operations (enrolments, meals, leave, cash entries,
settings, alerts and CSV exports) against the document configured through
``MESSMATE_*`` environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from messmate.configuration import get_settings
from messmate.domain.exceptions import MessMateError
from messmate.export import CsvExporter, export_filename
from messmate.ledger import LedgerEngine
from messmate.logging_utils import configure_root_logger
from messmate.persistence import JsonFileStore

cli = typer.Typer(help="Manage meal-plan customers, billing and alerts.")


def _engine() -> LedgerEngine:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return LedgerEngine.from_store(JsonFileStore(settings.data_directory, settings.storage_key))


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the JSON front end using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open 0.0.0.0 directly, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting MessMate on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "messmate.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.is_production),
    )


@cli.command()
def enroll(
    name: str = typer.Argument(..., help="Customer name."),
    plan_id: str = typer.Option("plan_1", "--plan", help="Plan identifier."),
    phone: Optional[str] = typer.Option(None, help="Contact number."),
) -> None:
    """Enroll a customer on a plan and book the plan payment."""

    try:
        customer = _engine().enroll(name, phone, plan_id)
    except MessMateError as error:
        _fail(error)
    if customer is None:
        _fail(ValueError("customer name is required"))
    typer.echo(
        f"Enrolled {customer.name} ({customer.id}) with {customer.meals_remaining} meals "
        f"until {customer.expiry_date.date().isoformat()}"
    )


@cli.command()
def meal(
    customer_id: str = typer.Argument(..., help="Customer identifier."),
    menu_item_id: str = typer.Argument(..., help="Menu item identifier."),
    portion: str = typer.Option("full", help="Portion size: half or full."),
    quantity: int = typer.Option(1, min=1, help="Number of plates."),
) -> None:
    """Record a meal, drawing on the allowance before billing."""

    try:
        record = _engine().record_meal(customer_id, menu_item_id, portion, quantity)
    except (MessMateError, ValueError) as error:
        _fail(error)
    typer.echo(
        f"{record.quote.covered} from plan, {record.quote.payable_units} payable "
        f"({record.quote.payable_amount:.2f}); {record.customer.meals_remaining} meals left, "
        f"balance {record.customer.balance:.2f}"
    )


@cli.command()
def leave(
    customer_id: str = typer.Argument(..., help="Customer identifier."),
    days: int = typer.Argument(..., help="Days of leave to grant."),
) -> None:
    """Extend a customer's expiry for a break."""

    try:
        customer = _engine().add_break(customer_id, days)
    except MessMateError as error:
        _fail(error)
    typer.echo(
        f"{customer.name} now expires {customer.expiry_date.date().isoformat()} "
        f"({customer.total_break_days} break days total)"
    )


@cli.command()
def log(
    transaction_type: str = typer.Argument(..., metavar="TYPE", help="income or expense."),
    amount: float = typer.Argument(..., help="Amount of money moved."),
    description: str = typer.Argument(..., help="What the entry is for."),
    category: Optional[str] = typer.Option(None, help="Expense category."),
) -> None:
    """Log a cash income or expense."""

    try:
        entry = _engine().add_transaction(transaction_type, amount, description, category)
    except (MessMateError, ValueError) as error:
        _fail(error)
    typer.echo(f"Logged {entry.type.value} {entry.amount:.2f} ({entry.id})")


@cli.command()
def settings(
    subscription_days: Optional[int] = typer.Option(None, help="Alert days before expiry."),
    meal_threshold: Optional[int] = typer.Option(None, help="Alert when meals fall to this."),
    balance_threshold: Optional[float] = typer.Option(None, help="Alert when dues exceed this."),
) -> None:
    """Show or update reminder thresholds."""

    engine = _engine()
    if subscription_days is None and meal_threshold is None and balance_threshold is None:
        current = engine.state.settings
    else:
        try:
            current = engine.update_settings(
                subscription_days=subscription_days,
                meal_threshold=meal_threshold,
                balance_threshold=balance_threshold,
            )
        except MessMateError as error:
            _fail(error)
    typer.echo(
        f"subscription_days={current.subscription_days} "
        f"meal_threshold={current.meal_threshold} "
        f"balance_threshold={current.balance_threshold:g}"
    )


@cli.command()
def alerts() -> None:
    """List renewal and pending-payment alerts."""

    engine = _engine()
    renewals = engine.renewal_alerts()
    typer.echo(f"Renewals due ({len(renewals)}):")
    for alert in renewals:
        typer.echo(
            f"  {alert.customer.name}: {alert.customer.meals_remaining} meals, "
            f"{alert.days_to_expiry} days (score {alert.urgency_score})"
        )
    owing = engine.pending_payments()
    typer.echo(f"Pending payments ({len(owing)}):")
    for customer in owing:
        typer.echo(f"  {customer.name}: {customer.balance:.2f}")


@cli.command()
def export(
    destination: Optional[Path] = typer.Option(None, help="Output CSV path."),
) -> None:
    """Write the transactions and customers CSV export."""

    engine = _engine()
    target = destination or get_settings().export_directory / export_filename(engine.now())
    written = CsvExporter().export(engine.state, target)
    typer.echo(f"Exported to {written}")


if __name__ == "__main__":
    cli()
