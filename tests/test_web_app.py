"""Mini README: Tests for the FastAPI JSON front end.

The application is built around an engine with a pinned clock and an
in-memory store, then exercised through ``TestClient``.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from messmate.interface import create_application
from messmate.ledger import LedgerEngine


@pytest.fixture
def client(engine: LedgerEngine) -> TestClient:
    return TestClient(create_application(engine))


def _enroll(client: TestClient, name: str = "Asha") -> dict:
    response = client.post("/customers", json={"name": name, "phone": "98765", "plan_id": "plan_1"})
    assert response.status_code == 201
    return response.json()


def test_enroll_and_list_customers(client: TestClient) -> None:
    customer = _enroll(client)

    assert customer["mealsRemaining"] == 60
    listing = client.get("/customers", params={"q": "ash"}).json()["customers"]
    assert [entry["id"] for entry in listing] == [customer["id"]]
    assert client.get("/state/summary").json()["dashboard"]["incomeThisMonth"] == 3500


def test_enroll_rejects_blank_name_and_unknown_plan(client: TestClient) -> None:
    assert client.post("/customers", json={"name": " ", "plan_id": "plan_1"}).status_code == 400
    assert client.post("/customers", json={"name": "Ravi", "plan_id": "nope"}).status_code == 404


def test_meal_quote_and_record(client: TestClient, engine: LedgerEngine) -> None:
    customer = _enroll(client)
    url = f"/customers/{customer['id']}/meals"

    quote = client.post(f"{url}/quote", json={"menu_item_id": "t1", "quantity": 2}).json()
    assert quote["covered"] == 2
    assert quote["payableAmount"] == 0
    assert engine.get_customer(customer["id"]).meals_remaining == 60

    recorded = client.post(url, json={"menu_item_id": "t1", "portion": "half", "quantity": 2}).json()
    assert recorded["customer"]["mealsRemaining"] == 58
    assert [entry["type"] for entry in recorded["transactions"]] == ["USAGE"]


def test_meal_errors_map_to_status_codes(client: TestClient) -> None:
    customer = _enroll(client)

    assert client.post("/customers/ghost/meals", json={"menu_item_id": "t1"}).status_code == 404
    response = client.post(
        f"/customers/{customer['id']}/meals", json={"menu_item_id": "t1", "quantity": 0}
    )
    assert response.status_code == 422


def test_break_and_transactions(client: TestClient) -> None:
    customer = _enroll(client)

    extended = client.post(f"/customers/{customer['id']}/breaks", json={"days": 5}).json()
    assert extended["totalBreakDays"] == 5
    assert client.post(f"/customers/{customer['id']}/breaks", json={"days": 0}).status_code == 400

    created = client.post(
        "/transactions",
        json={"type": "EXPENSE", "amount": 120, "description": "Spices", "category": "Oil & Spices"},
    )
    assert created.status_code == 201
    rejected = client.post("/transactions", json={"type": "INCOME", "amount": 0, "description": "x"})
    assert rejected.status_code == 400

    log = client.get("/transactions").json()["transactions"]
    assert [entry["type"] for entry in log] == ["EXPENSE", "SUBSCRIPTION"]


def test_alerts_and_settings(client: TestClient) -> None:
    _enroll(client)

    patched = client.patch("/settings", json={"meal_threshold": 60, "subscription_days": 0})
    assert patched.json() == {"subscriptionDays": 1, "mealThreshold": 60, "balanceThreshold": 1000.0}
    assert client.patch("/settings", json={"meal_threshold": "many"}).status_code == 422

    alerts = client.get("/alerts").json()
    assert len(alerts["renewals"]) == 1
    assert alerts["renewals"][0]["urgencyScore"] == 90
    assert alerts["pendingPayments"] == []


def test_session_theme_and_export(client: TestClient) -> None:
    assert client.post("/session/login", json={"username": "admin", "pin": "nope"}).status_code == 401
    assert client.post("/session/login", json={"username": "Admin", "pin": "1234"}).json()["role"] == "OWNER"
    assert client.post("/session/logout").json() == {"currentUser": None}
    assert client.post("/theme/toggle").json() == {"darkMode": True}

    _enroll(client)
    export = client.get("/export.csv")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert "messmate_export_2024-06-01.csv" in export.headers["content-disposition"]
    assert "Customers" in export.text
