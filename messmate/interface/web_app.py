"""Mini README: FastAPI JSON front end for the MessMate ledger.

Structure:
    * Request models - pydantic bodies validated at the HTTP boundary.
    * create_application - application factory wiring routes to a LedgerEngine.

The routes are thin: they translate JSON into engine calls and map the
ledger's error taxonomy onto HTTP status codes (404 lookups, 400
validation, 401 credentials, 503 durability failures).
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..configuration import get_settings
from ..domain.catalog import EXPENSE_CATEGORIES
from ..domain.exceptions import (
    InvalidCredentialsError,
    MessMateError,
    PersistenceFailedError,
)
from ..domain.models import Portion, TransactionType
from ..export import export_filename, render_csv
from ..ledger import LedgerEngine, finance_log, search_customers
from ..logging_utils import configure_root_logger, get_logger
from ..persistence import JsonFileStore

LOGGER = get_logger(__name__)

_T = TypeVar("_T")


class EnrollRequest(BaseModel):
    name: str
    phone: Optional[str] = None
    plan_id: str


class MealRequest(BaseModel):
    menu_item_id: str
    portion: Portion = Portion.FULL
    quantity: int = Field(1, ge=1)


class BreakRequest(BaseModel):
    days: int


class TransactionRequest(BaseModel):
    type: TransactionType
    amount: float
    description: str
    category: Optional[str] = None


class SettingsPatch(BaseModel):
    subscription_days: Optional[int] = None
    meal_threshold: Optional[int] = None
    balance_threshold: Optional[float] = None


class LoginRequest(BaseModel):
    username: str
    pin: str


def _call(operation: Callable[[], _T]) -> _T:
    """Run an engine operation translating ledger errors into HTTP errors."""

    try:
        return operation()
    except PersistenceFailedError as error:
        raise HTTPException(status_code=503, detail=str(error)) from error
    except InvalidCredentialsError as error:
        raise HTTPException(status_code=401, detail=str(error)) from error
    except KeyError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error
    except (ValueError, MessMateError) as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def create_application(engine: Optional[LedgerEngine] = None) -> FastAPI:
    """Create the FastAPI application bound to a ledger engine."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    if engine is None:
        engine = LedgerEngine.from_store(
            JsonFileStore(settings.data_directory, settings.storage_key)
        )
    app = FastAPI(title="MessMate Ledger", version="0.1.0")

    @app.get("/state/summary")
    async def summary() -> JSONResponse:
        """Dashboard figures plus catalogue and session details."""

        state = engine.state
        return JSONResponse(
            {
                "dashboard": engine.dashboard().as_dict(),
                "currentUser": state.current_user.username if state.current_user else None,
                "darkMode": state.dark_mode,
                "plans": [plan.as_dict() for plan in state.plans],
                "menuItems": [item.as_dict() for item in state.menu_items],
                "expenseCategories": EXPENSE_CATEGORIES,
            }
        )

    @app.get("/customers")
    async def list_customers(q: str = "") -> JSONResponse:
        customers = search_customers(engine.state.customers, q)
        LOGGER.debug("Returning %s customers for query '%s'", len(customers), q)
        return JSONResponse({"customers": [customer.as_dict() for customer in customers]})

    @app.post("/customers", status_code=201)
    async def enroll_customer(body: EnrollRequest) -> JSONResponse:
        customer = _call(lambda: engine.enroll(body.name, body.phone, body.plan_id))
        if customer is None:
            raise HTTPException(status_code=400, detail="Customer name is required")
        return JSONResponse(customer.as_dict(), status_code=201)

    @app.post("/customers/{customer_id}/meals/quote")
    async def quote_meal(customer_id: str, body: MealRequest) -> JSONResponse:
        quote = _call(
            lambda: engine.quote_meal(customer_id, body.menu_item_id, body.portion, body.quantity)
        )
        return JSONResponse(quote.as_dict())

    @app.post("/customers/{customer_id}/meals")
    async def record_meal(customer_id: str, body: MealRequest) -> JSONResponse:
        record = _call(
            lambda: engine.record_meal(customer_id, body.menu_item_id, body.portion, body.quantity)
        )
        return JSONResponse(
            {
                "customer": record.customer.as_dict(),
                "quote": record.quote.as_dict(),
                "transactions": [entry.as_dict() for entry in record.transactions],
            }
        )

    @app.post("/customers/{customer_id}/breaks")
    async def add_break(customer_id: str, body: BreakRequest) -> JSONResponse:
        customer = _call(lambda: engine.add_break(customer_id, body.days))
        return JSONResponse(customer.as_dict())

    @app.get("/transactions")
    async def list_transactions() -> JSONResponse:
        entries = finance_log(engine.state.transactions)
        return JSONResponse({"transactions": [entry.as_dict() for entry in entries]})

    @app.post("/transactions", status_code=201)
    async def add_transaction(body: TransactionRequest) -> JSONResponse:
        entry = _call(
            lambda: engine.add_transaction(body.type, body.amount, body.description, body.category)
        )
        return JSONResponse(entry.as_dict(), status_code=201)

    @app.get("/alerts")
    async def alerts() -> JSONResponse:
        renewals = engine.renewal_alerts()
        payments = engine.pending_payments()
        LOGGER.debug("Alerts -> renewals: %s pending: %s", len(renewals), len(payments))
        return JSONResponse(
            {
                "renewals": [alert.as_dict() for alert in renewals],
                "pendingPayments": [
                    {"customerId": c.id, "name": c.name, "phone": c.phone, "balance": c.balance}
                    for c in payments
                ],
            }
        )

    @app.get("/settings")
    async def read_settings() -> JSONResponse:
        return JSONResponse(engine.state.settings.as_dict())

    @app.patch("/settings")
    async def patch_settings(body: SettingsPatch) -> JSONResponse:
        updated = _call(
            lambda: engine.update_settings(
                subscription_days=body.subscription_days,
                meal_threshold=body.meal_threshold,
                balance_threshold=body.balance_threshold,
            )
        )
        return JSONResponse(updated.as_dict())

    @app.post("/session/login")
    async def login(body: LoginRequest) -> JSONResponse:
        user = _call(lambda: engine.login(body.username, body.pin))
        return JSONResponse({"username": user.username, "role": user.role.value})

    @app.post("/session/logout")
    async def logout() -> JSONResponse:
        _call(engine.logout)
        return JSONResponse({"currentUser": None})

    @app.post("/theme/toggle")
    async def toggle_theme() -> JSONResponse:
        return JSONResponse({"darkMode": _call(engine.toggle_dark_mode)})

    @app.get("/export.csv")
    async def export_csv() -> PlainTextResponse:
        filename = export_filename(engine.now())
        LOGGER.info("Serving CSV export %s", filename)
        return PlainTextResponse(
            render_csv(engine.state.transactions, engine.state.customers),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app
