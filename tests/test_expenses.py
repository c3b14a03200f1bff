from datetime import date, timedelta
from decimal import Decimal

import pytest

from bizdesk.models.expense import ExpenseCategory
from bizdesk.schemas.expense_schemas import ExpenseCreate
from bizdesk.services.expense_service import ExpenseService
from bizdesk.core.exceptions import ValidationException


def _create(client, headers, **overrides):
    data = {"label": "Shop rent", "amount": 150000, "category": "rent"}
    data.update(overrides)
    return client.post("/api/expenses", headers=headers, json=data)


class TestCreateExpense:
    def test_create_expense_success(self, client, headers_a):
        response = _create(client, headers_a, notes="October")
        assert response.status_code == 201
        body = response.json()
        assert body["amount"] == 150000.00
        assert body["category"] == "rent"
        assert body["notes"] == "October"
        assert body["expense_date"] == str(date.today())

    @pytest.mark.parametrize(
        "category,expected",
        [
            (ExpenseCategory.RENT, True),
            (ExpenseCategory.SALARIES, True),
            (ExpenseCategory.ELECTRICITY, True),
            (ExpenseCategory.TRANSPORT, False),
            (ExpenseCategory.MARKETING, False),
            (ExpenseCategory.OTHER, False),
        ],
    )
    def test_recurrence_follows_category(self, db_session, context_a, category, expected):
        expense = ExpenseService(db_session).create_expense(
            ExpenseCreate(label="Monthly", amount=Decimal("1000"), category=category), context_a
        )
        assert expense.is_recurring is expected

    def test_explicit_recurrence_wins(self, client, headers_a):
        response = _create(client, headers_a, is_recurring=False)
        assert response.json()["is_recurring"] is False

    def test_unknown_category_rejected(self, client, headers_a):
        assert _create(client, headers_a, category="yachts").status_code == 422

    def test_non_positive_amount_rejected(self, client, headers_a):
        assert _create(client, headers_a, amount=0).status_code == 422


class TestListExpenses:
    def test_filter_by_category(self, client, headers_a):
        _create(client, headers_a)
        transport = _create(client, headers_a, label="Taxi", amount=3000, category="transport").json()

        response = client.get("/api/expenses", headers=headers_a, params={"category": "transport"})
        assert response.status_code == 200
        assert [e["id"] for e in response.json()["expenses"]] == [transport["id"]]

    def test_filter_by_dates(self, client, headers_a):
        today = date.today()
        old = _create(client, headers_a, expense_date=str(today - timedelta(days=30))).json()
        _create(client, headers_a)

        response = client.get(
            "/api/expenses",
            headers=headers_a,
            params={"end_date": str(today - timedelta(days=1))},
        )
        assert [e["id"] for e in response.json()["expenses"]] == [old["id"]]

    def test_inverted_dates_rejected(self, db_session, context_a):
        today = date.today()
        with pytest.raises(ValidationException):
            ExpenseService(db_session).list_expenses(
                context_a, start_date=today, end_date=today - timedelta(days=1)
            )


class TestUpdateDeleteExpense:
    def test_update_expense(self, client, headers_a):
        created = _create(client, headers_a).json()
        response = client.patch(
            f"/api/expenses/{created['id']}",
            headers=headers_a,
            json={"amount": 175000, "category": "maintenance"},
        )
        assert response.status_code == 200
        assert response.json()["amount"] == 175000.00
        assert response.json()["category"] == "maintenance"

    def test_delete_expense(self, client, headers_a):
        created = _create(client, headers_a).json()
        assert client.delete(f"/api/expenses/{created['id']}", headers=headers_a).status_code == 204
        assert client.get(f"/api/expenses/{created['id']}", headers=headers_a).status_code == 404

    def test_total(self, client, headers_a):
        _create(client, headers_a, amount=1000)
        _create(client, headers_a, amount=250.5)

        response = client.get("/api/expenses/total", headers=headers_a)
        assert response.json()["total"] == 1250.50
