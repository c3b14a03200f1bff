from datetime import date, timedelta


def _stock(client, headers, product="Millet", quantity=10, unit_price=500):
    client.post(
        "/api/purchases",
        headers=headers,
        json={"product_name": product, "quantity": quantity, "unit_price": unit_price},
    )


def _sell(client, headers, **overrides):
    data = {"product_name": "Millet", "quantity": 3, "unit_price": 800}
    data.update(overrides)
    return client.post("/api/sales", headers=headers, json=data)


class TestCreateSale:
    def test_create_sale_success(self, client, headers_a):
        _stock(client, headers_a)
        response = _sell(client, headers_a, customer="Awa")
        assert response.status_code == 201
        body = response.json()
        assert body["total_price"] == 2400.00
        assert body["customer"] == "Awa"
        assert body["sale_date"] == str(date.today())

    def test_sale_without_stock_rejected(self, client, headers_a):
        response = _sell(client, headers_a)
        assert response.status_code == 400
        assert "insufficient stock" in response.json()["detail"].lower()

    def test_sale_exceeding_stock_rejected(self, client, headers_a):
        _stock(client, headers_a, quantity=5)
        _sell(client, headers_a, quantity=4)

        response = _sell(client, headers_a, quantity=2)
        assert response.status_code == 400
        assert client.get("/api/sales", headers=headers_a).json()["total"] == 1

    def test_stock_match_ignores_case_and_spaces(self, client, headers_a):
        _stock(client, headers_a, product="Millet")
        response = _sell(client, headers_a, product_name="  millet ", quantity=10)
        assert response.status_code == 201

    def test_accented_product_has_stock(self, client, headers_a):
        _stock(client, headers_a, product="Écharpe", quantity=5)
        response = _sell(client, headers_a, product_name="écharpe", quantity=5)
        assert response.status_code == 201
        assert client.get("/api/stock/ÉCHARPE", headers=headers_a).json()["available"] == 0

    def test_other_tenant_stock_does_not_count(self, client, headers_a, headers_b):
        _stock(client, headers_a)
        response = _sell(client, headers_b)
        assert response.status_code == 400


class TestUpdateSale:
    def test_increase_within_stock(self, client, headers_a):
        _stock(client, headers_a, quantity=10)
        sale = _sell(client, headers_a, quantity=3).json()

        response = client.patch(f"/api/sales/{sale['id']}", headers=headers_a, json={"quantity": 10})
        assert response.status_code == 200
        assert response.json()["total_price"] == 8000.00

    def test_increase_beyond_stock_rejected(self, client, headers_a):
        _stock(client, headers_a, quantity=10)
        sale = _sell(client, headers_a, quantity=3).json()

        response = client.patch(f"/api/sales/{sale['id']}", headers=headers_a, json={"quantity": 11})
        assert response.status_code == 400
        assert client.get(f"/api/sales/{sale['id']}", headers=headers_a).json()["quantity"] == 3

    def test_decrease_always_allowed(self, client, db_session, headers_a):
        _stock(client, headers_a, quantity=10)
        sale = _sell(client, headers_a, quantity=8).json()

        response = client.patch(f"/api/sales/{sale['id']}", headers=headers_a, json={"quantity": 1})
        assert response.status_code == 200

    def test_switch_product_checks_new_product(self, client, headers_a):
        _stock(client, headers_a, product="Millet", quantity=10)
        _stock(client, headers_a, product="Sorghum", quantity=2)
        sale = _sell(client, headers_a, quantity=3).json()

        response = client.patch(
            f"/api/sales/{sale['id']}", headers=headers_a, json={"product_name": "Sorghum"}
        )
        assert response.status_code == 400

    def test_delete_sale_restores_stock(self, client, headers_a):
        _stock(client, headers_a, quantity=5)
        sale = _sell(client, headers_a, quantity=5).json()

        assert client.delete(f"/api/sales/{sale['id']}", headers=headers_a).status_code == 204
        stock = client.get("/api/stock/Millet", headers=headers_a).json()
        assert stock["available"] == 5


class TestSaleQueries:
    def test_list_and_period_filter(self, client, headers_a):
        _stock(client, headers_a, quantity=50)
        today = date.today()
        _sell(client, headers_a, sale_date=str(today - timedelta(days=45)))
        recent = _sell(client, headers_a).json()

        everything = client.get("/api/sales", headers=headers_a).json()
        assert everything["total"] == 2

        filtered = client.get(
            "/api/sales",
            headers=headers_a,
            params={"start_date": str(today - timedelta(days=7))},
        ).json()
        assert [s["id"] for s in filtered["sales"]] == [recent["id"]]

    def test_revenue_total(self, client, headers_a):
        _stock(client, headers_a, quantity=50)
        _sell(client, headers_a, quantity=2, unit_price=1000)
        _sell(client, headers_a, quantity=1, unit_price=750)

        response = client.get("/api/sales/total", headers=headers_a)
        assert response.json()["total"] == 2750.00

    def test_get_missing_sale(self, client, headers_a):
        response = client.get("/api/sales/777", headers=headers_a)
        assert response.status_code == 404
