from decimal import Decimal

import pytest

from bizdesk.core.exceptions import NotFoundException
from bizdesk.schemas.purchase_schemas import PurchaseCreate, PurchaseUpdate
from bizdesk.schemas.sale_schemas import SaleCreate
from bizdesk.schemas.stock_schemas import StockStatus
from bizdesk.services.purchase_service import PurchaseService
from bizdesk.services.sale_service import SaleService
from bizdesk.services.stock_service import StockService, stock_status


def _buy(db, context, product, quantity, unit_price):
    PurchaseService(db).create_purchase(
        PurchaseCreate(product_name=product, quantity=quantity, unit_price=Decimal(unit_price)), context
    )


def _sell(db, context, product, quantity, unit_price):
    SaleService(db).create_sale(
        SaleCreate(product_name=product, quantity=quantity, unit_price=Decimal(unit_price)), context
    )


@pytest.mark.parametrize(
    "available,expected",
    [
        (-2, StockStatus.NEGATIVE),
        (0, StockStatus.OUT_OF_STOCK),
        (1, StockStatus.LOW),
        (9, StockStatus.LOW),
        (10, StockStatus.IN_STOCK),
    ],
)
def test_stock_status(available, expected):
    assert stock_status(available, 10) is expected


class TestStockLevels:
    def test_product_stock_figures(self, db_session, context_a):
        _buy(db_session, context_a, "Millet", 10, "400")
        _buy(db_session, context_a, "millet ", 10, "500")
        _sell(db_session, context_a, "MILLET", 5, "700")

        item = StockService(db_session).get_product_stock("Millet", context_a)
        assert item.quantity_purchased == 20
        assert item.quantity_sold == 5
        assert item.available == 15
        assert item.average_purchase_price == 450.0
        assert item.average_sale_price == 700.0
        assert item.stock_value == 6750.0
        assert item.unit_margin == 250.0
        assert item.status is StockStatus.IN_STOCK

    def test_average_rounds_half_up(self, db_session, context_a):
        _buy(db_session, context_a, "Oil", 1, "1.00")
        _buy(db_session, context_a, "Oil", 1, "1.01")

        item = StockService(db_session).get_product_stock("Oil", context_a)
        assert item.average_purchase_price == 1.01

    def test_unknown_product_not_found(self, db_session, context_a):
        with pytest.raises(NotFoundException):
            StockService(db_session).get_product_stock("Caviar", context_a)

    def test_list_sorted_by_available(self, db_session, context_a):
        _buy(db_session, context_a, "Rice", 50, "300")
        _buy(db_session, context_a, "Sugar", 5, "600")
        _buy(db_session, context_a, "Tea", 3, "1000")
        _sell(db_session, context_a, "Tea", 3, "1500")

        names = [i.product_name for i in StockService(db_session).list_stock(context_a)]
        assert names == ["tea", "sugar", "rice"]

    def test_out_of_stock_and_low(self, db_session, context_a):
        _buy(db_session, context_a, "Rice", 50, "300")
        _buy(db_session, context_a, "Sugar", 5, "600")
        _buy(db_session, context_a, "Tea", 3, "1000")
        _sell(db_session, context_a, "Tea", 3, "1500")

        service = StockService(db_session)
        assert [i.product_name for i in service.out_of_stock(context_a)] == ["tea"]
        assert [i.product_name for i in service.low_stock(context_a)] == ["sugar"]

    def test_threshold_is_configurable(self, db_session, context_a):
        _buy(db_session, context_a, "Rice", 50, "300")
        service = StockService(db_session, low_stock_threshold=100)
        assert [i.product_name for i in service.low_stock(context_a)] == ["rice"]

    def test_total_value(self, db_session, context_a):
        _buy(db_session, context_a, "Rice", 10, "300")
        _buy(db_session, context_a, "Sugar", 4, "600")
        _sell(db_session, context_a, "Sugar", 2, "900")

        assert StockService(db_session).total_value(context_a) == Decimal("4200.00")

    def test_sufficiency(self, db_session, context_a):
        _buy(db_session, context_a, "Rice", 10, "300")
        service = StockService(db_session)
        assert service.has_sufficient_stock("Rice", 10, context_a)
        assert not service.has_sufficient_stock("Rice", 11, context_a)
        assert not service.has_sufficient_stock("Caviar", 1, context_a)

    def test_accented_product_matches_across_paths(self, db_session, context_a):
        _buy(db_session, context_a, "Écharpe", 5, "2500")
        service = StockService(db_session)

        assert service.available_quantity("écharpe ", context_a) == 5
        assert service.get_product_stock("ÉCHARPE", context_a).available == 5
        assert [(i.product_name, i.available) for i in service.list_stock(context_a)] == [
            ("écharpe", 5)
        ]

        _sell(db_session, context_a, "Écharpe", 1, "3000")
        assert service.available_quantity("Écharpe", context_a) == 4

    def test_renamed_purchase_moves_stock(self, db_session, context_a):
        purchase = PurchaseService(db_session).create_purchase(
            PurchaseCreate(product_name="Pagne", quantity=3, unit_price=Decimal("1500")), context_a
        )
        assert purchase.product_key == "pagne"

        PurchaseService(db_session).update_purchase(
            purchase.id, PurchaseUpdate(product_name="Bazin Riche"), context_a
        )
        service = StockService(db_session)
        assert service.available_quantity("bazin riche", context_a) == 3
        assert service.available_quantity("Pagne", context_a) == 0

    def test_stock_is_per_tenant(self, db_session, context_a, context_b):
        _buy(db_session, context_a, "Rice", 10, "300")
        assert StockService(db_session).list_stock(context_b) == []


class TestStockApi:
    def test_list_endpoint(self, client, headers_a):
        client.post(
            "/api/purchases",
            headers=headers_a,
            json={"product_name": "Rice", "quantity": 4, "unit_price": 300},
        )
        response = client.get("/api/stock", headers=headers_a)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["status"] == "low"

    def test_value_and_check_endpoints(self, client, headers_a):
        client.post(
            "/api/purchases",
            headers=headers_a,
            json={"product_name": "Rice", "quantity": 4, "unit_price": 300},
        )
        assert client.get("/api/stock/value", headers=headers_a).json()["total_value"] == 1200.0

        check = client.get(
            "/api/stock/check", headers=headers_a, params={"product_name": "rice", "quantity": 5}
        ).json()
        assert check["available"] == 4
        assert check["sufficient"] is False

    def test_missing_product_is_404(self, client, headers_a):
        assert client.get("/api/stock/Caviar", headers=headers_a).status_code == 404

    def test_out_of_stock_endpoint(self, client, headers_a):
        client.post(
            "/api/purchases",
            headers=headers_a,
            json={"product_name": "Tea", "quantity": 1, "unit_price": 300},
        )
        client.post(
            "/api/sales",
            headers=headers_a,
            json={"product_name": "Tea", "quantity": 1, "unit_price": 500},
        )
        response = client.get("/api/stock/out-of-stock", headers=headers_a)
        assert [i["product_name"] for i in response.json()["items"]] == ["tea"]
        assert client.get("/api/stock/low", headers=headers_a).json()["total"] == 0
