"""
Accounts API integration tests

Drives the FastAPI app through httpx with the DB and settings
dependencies pointed at a temporary database.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.auth import ACCOUNTS_PERMISSION, issue_token
from core.storage.invoice_store import InvoiceStore
from core.types import AppMode, Role
from web.app import app
from web.dependencies import get_app_settings, get_db, get_db_write, get_registry
from web.models.responses import ErrorResponse

SECRET = "api_test_secret"


@dataclass
class FakeSettings:
    mode: AppMode = AppMode.DEVELOPMENT
    web_secret_key: str = SECRET
    token_algorithm: str = "HS256"


def auth(permissions: tuple[str, ...] = (ACCOUNTS_PERMISSION,), role: Role = Role.STAFF) -> dict[str, str]:
    token = issue_token("user-1", SECRET, role=role, permissions=permissions)
    return {"Authorization": f"Bearer {token}"}


def transaction_body(**overrides) -> dict:
    body = {
        "date": "2026-02-10",
        "type": "Credit",
        "category": "Client payment",
        "accountingCategory": "invoice_payment",
        "amount": 1000,
        "paymentMode": "Bank Transfer",
        "reference": {"type": "Invoice", "id": "inv-1", "documentNo": "INV-001"},
    }
    body.update(overrides)
    return body


@pytest_asyncio.fixture
async def client(db: SQLiteAdapter) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with db.transaction():
        await InvoiceStore(db).create("INV-001", Decimal("1000"), invoice_id="inv-1")

    async def override_db() -> AsyncGenerator[SQLiteAdapter, None]:
        yield db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_db_write] = override_db
    app.dependency_overrides[get_app_settings] = lambda: FakeSettings()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


class TestHealth:
    """GET /health"""

    @pytest.mark.asyncio
    async def test_health(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["mode"] == "development"


class TestAuth:
    """Session and permission checks"""

    @pytest.mark.asyncio
    async def test_no_token(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/transactions")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_bad_token(self, client: httpx.AsyncClient) -> None:
        response = await client.get(
            "/api/accounts/transactions",
            headers={"Authorization": "Bearer garbage"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_permission(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/pnl", headers=auth(permissions=()))

        assert response.status_code == 403
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_admin_allowed(self, client: httpx.AsyncClient) -> None:
        response = await client.get(
            "/api/accounts/categories",
            headers=auth(permissions=(), role=Role.ADMIN),
        )

        assert response.status_code == 200


class TestTransactions:
    """/api/accounts/transactions"""

    @pytest.mark.asyncio
    async def test_create_reconciles_invoice(self, client: httpx.AsyncClient, db: SQLiteAdapter) -> None:
        response = await client.post("/api/accounts/transactions", json=transaction_body(), headers=auth())

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["amount"] == "1000.00"
        assert body["data"]["accountingCategory"] == "invoice_payment"
        assert body["data"]["reference"] == {"type": "Invoice", "id": "inv-1", "documentNo": "INV-001"}
        assert body["data"]["createdBy"] == "user-1"
        assert body["meta"]["reconciliation"] == "applied"

        invoice = await InvoiceStore(db).find_by_id("inv-1")
        assert invoice.status == "Paid"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": 0},
            {"amount": -5},
            {"amount": "abc"},
            {"type": "Refund"},
            {"accountingCategory": "salary"},
            {"category": ""},
        ],
    )
    async def test_create_invalid(self, client: httpx.AsyncClient, overrides: dict) -> None:
        response = await client.post(
            "/api/accounts/transactions",
            json=transaction_body(**overrides),
            headers=auth(),
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"]

    @pytest.mark.asyncio
    async def test_list_filters_and_balance(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/accounts/transactions", json=transaction_body(), headers=auth())
        await client.post(
            "/api/accounts/transactions",
            json={"date": "2026-03-05", "type": "Debit", "category": "AWS",
                  "accountingCategory": "hosting_cloud", "amount": "250.50", "paymentMode": "UPI"},
            headers=auth(),
        )

        response = await client.get(
            "/api/accounts/transactions",
            params={"month": "3", "year": "2026"},
            headers=auth(),
        )

        body = response.json()
        assert response.status_code == 200
        assert [t["category"] for t in body["data"]] == ["AWS"]
        assert body["meta"]["total"] == 1
        assert body["meta"]["globalBalance"] == "749.50"
        assert body["meta"]["period"] == "March 2026"

    @pytest.mark.asyncio
    async def test_list_search_and_all(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/accounts/transactions", json=transaction_body(description="Acme settlement"), headers=auth())

        response = await client.get(
            "/api/accounts/transactions",
            params={"search": "ACME", "type": "all", "all": "true"},
            headers=auth(),
        )

        assert len(response.json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_list_invalid_type(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/transactions", params={"type": "Both"}, headers=auth())

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"endDate": "9999-12-31"},
            {"startDate": "0001-01-01", "endDate": "2026-01-01"},
            {"year": "9999"},
        ],
    )
    async def test_list_date_out_of_range(self, client: httpx.AsyncClient, params: dict) -> None:
        response = await client.get("/api/accounts/transactions", params=params, headers=auth())

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_update_by_query_id(self, client: httpx.AsyncClient, db: SQLiteAdapter) -> None:
        created = await client.post(
            "/api/accounts/transactions", json=transaction_body(amount=500), headers=auth()
        )
        entry_id = created.json()["data"]["id"]

        response = await client.put(
            "/api/accounts/transactions",
            params={"id": entry_id},
            json={"amount": 700, "description": "corrected"},
            headers=auth(),
        )

        assert response.status_code == 200
        assert response.json()["data"]["amount"] == "700.00"
        invoice = await InvoiceStore(db).find_by_id("inv-1")
        assert invoice.amount_paid == Decimal("700")

    @pytest.mark.asyncio
    async def test_update_by_body_id(self, client: httpx.AsyncClient) -> None:
        created = await client.post("/api/accounts/transactions", json=transaction_body(), headers=auth())
        entry_id = created.json()["data"]["id"]

        response = await client.put(
            "/api/accounts/transactions",
            json={"id": entry_id, "paymentMode": "Cash"},
            headers=auth(),
        )

        assert response.json()["data"]["paymentMode"] == "Cash"

    @pytest.mark.asyncio
    async def test_update_errors(self, client: httpx.AsyncClient) -> None:
        no_id = await client.put("/api/accounts/transactions", json={"amount": 1}, headers=auth())
        unknown = await client.put(
            "/api/accounts/transactions", params={"id": "missing"}, json={"amount": 1}, headers=auth()
        )

        assert no_id.status_code == 400
        assert no_id.json()["error"] == "ID required"
        assert unknown.status_code == 404
        assert unknown.json()["error"] == "Transaction not found"

    @pytest.mark.asyncio
    async def test_delete(self, client: httpx.AsyncClient, db: SQLiteAdapter) -> None:
        created = await client.post("/api/accounts/transactions", json=transaction_body(), headers=auth())
        entry_id = created.json()["data"]["id"]

        response = await client.delete("/api/accounts/transactions", params={"id": entry_id}, headers=auth())

        assert response.status_code == 200
        assert response.json()["meta"]["reconciliation"] == "applied"
        invoice = await InvoiceStore(db).find_by_id("inv-1")
        assert invoice.status == "Pending"
        assert invoice.amount_paid == Decimal("0")

    @pytest.mark.asyncio
    async def test_delete_errors(self, client: httpx.AsyncClient) -> None:
        no_id = await client.delete("/api/accounts/transactions", headers=auth())
        unknown = await client.delete("/api/accounts/transactions", params={"id": "missing"}, headers=auth())

        assert no_id.status_code == 400
        assert unknown.status_code == 404


class TestCategories:
    """/api/accounts/categories"""

    @pytest.mark.asyncio
    async def test_all(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/categories", headers=auth())

        ids = [c["id"] for c in response.json()["data"]]
        assert "owner_capital" in ids and "salary" in ids

    @pytest.mark.asyncio
    async def test_by_type(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/categories", params={"type": "Credit"}, headers=auth())

        body = response.json()
        assert all(c["appliesTo"] in ("Credit", "Both") for c in body["data"])
        assert list(body["grouped"]) == ["Revenue", "Other Income", "Balance Sheet Entry"]

    @pytest.mark.asyncio
    async def test_invalid_type(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/categories", params={"type": "Transfer"}, headers=auth())

        assert response.status_code == 400


class TestStatements:
    """/api/accounts/pnl and /api/accounts/balance-sheet"""

    @pytest.mark.asyncio
    async def test_pnl_month(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/accounts/transactions", json=transaction_body(), headers=auth())
        await client.post(
            "/api/accounts/transactions",
            json={"date": "2026-02-12", "type": "Debit", "category": "AWS",
                  "accountingCategory": "hosting_cloud", "amount": 100},
            headers=auth(),
        )

        response = await client.get("/api/accounts/pnl", params={"year": 2026, "month": 2}, headers=auth())

        data = response.json()["data"]
        assert data["period"] == "February 2026"
        assert data["totals"]["totalRevenue"] == "1000.00"
        assert data["cogs"]["lines"] == [{"label": "Hosting & Infrastructure", "amount": "100.00"}]
        assert data["grossMarginPct"] == "90.0"
        assert data["netIncome"] == "900.00"
        assert data["fiscal"] is False

    @pytest.mark.asyncio
    async def test_pnl_without_revenue(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/pnl", params={"year": 2019}, headers=auth())

        data = response.json()["data"]
        assert data["period"] == "FY 2019"
        assert data["grossMarginPct"] == "0.0"
        assert data["netMarginPct"] == "0.0"

    @pytest.mark.asyncio
    async def test_pnl_fiscal(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/pnl", params={"year": 2025, "fiscal": "true"}, headers=auth())

        assert response.json()["data"]["period"] == "FY 2025-26"

    @pytest.mark.asyncio
    async def test_pnl_invalid_month(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts/pnl", params={"year": 2026, "month": 13}, headers=auth())

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"year": 0},
            {"year": 9999},
            {"year": 9999, "month": 12},
            {"year": 9999, "fiscal": "true"},
        ],
    )
    async def test_pnl_year_out_of_range(self, client: httpx.AsyncClient, params: dict) -> None:
        response = await client.get("/api/accounts/pnl", params=params, headers=auth())

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid year")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("as_of", ["9999-12-31", "0001-01-01", "not-a-date"])
    async def test_balance_sheet_as_of_out_of_range(self, client: httpx.AsyncClient, as_of: str) -> None:
        response = await client.get("/api/accounts/balance-sheet", params={"asOf": as_of}, headers=auth())

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_balance_sheet(self, client: httpx.AsyncClient) -> None:
        await client.post(
            "/api/accounts/transactions",
            json={"date": "2026-01-02", "type": "Credit", "category": "Capital",
                  "accountingCategory": "owner_capital", "amount": 5000},
            headers=auth(),
        )
        await client.post(
            "/api/accounts/balance-sheet",
            json={"name": "Security deposit", "category": "Current Asset", "amount": 250},
            headers=auth(),
        )

        response = await client.get("/api/accounts/balance-sheet", params={"asOf": "2026-06-01"}, headers=auth())

        data = response.json()["data"]
        current = {line["name"]: line for line in data["assets"]["current"]}
        assert current["Bank Accounts"]["amount"] == "5000.00"
        assert current["Accounts Receivable"]["amount"] == "1000.00"
        assert current["Security deposit"]["isSystem"] is False
        assert data["equity"][0] == {"name": "Owner's Capital", "amount": "5000.00", "isSystem": True}
        assert data["currentYear"] == 2026

    @pytest.mark.asyncio
    async def test_balance_sheet_item_lifecycle(self, client: httpx.AsyncClient) -> None:
        created = await client.post(
            "/api/accounts/balance-sheet",
            json={"name": "Director loan", "category": "Long-term Liability", "amount": "1200", "notes": "0%"},
            headers=auth(),
        )
        item_id = created.json()["data"]["id"]

        deleted = await client.delete("/api/accounts/balance-sheet", params={"id": item_id}, headers=auth())
        again = await client.delete("/api/accounts/balance-sheet", params={"id": item_id}, headers=auth())

        assert created.json()["data"]["amount"] == "1200.00"
        assert deleted.json() == {"success": True}
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_balance_sheet_item_invalid(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/accounts/balance-sheet",
            json={"name": "X", "category": "Goodwill", "amount": 1},
            headers=auth(),
        )

        assert response.status_code == 400


class TestInternalErrors:
    """Unexpected failures"""

    @pytest.mark.asyncio
    async def test_generic_500(self, client: httpx.AsyncClient) -> None:
        def broken_registry():
            raise RuntimeError("registry unavailable")

        app.dependency_overrides[get_registry] = broken_registry
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/api/accounts/categories", headers=auth())

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_error_bodies_follow_error_schema(self, client: httpx.AsyncClient) -> None:
        responses = [
            await client.get("/api/accounts/pnl", params={"year": 0}, headers=auth()),
            await client.post("/api/accounts/transactions", json={"amount": "x"}, headers=auth()),
            await client.get("/api/accounts/transactions"),
        ]

        for response in responses:
            body = ErrorResponse.model_validate(response.json())
            assert body.success is False
            assert set(response.json()) == {"success", "error"}
