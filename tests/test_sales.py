from datetime import datetime

from velora.models.sale import Sale
from helpers import create_company, login_company


def sale_payload(customer_id: str, *lines) -> dict:
    return {
        "customer_id": customer_id,
        "items": [{"item_id": item_id, "quantity": qty, "discount": discount} for item_id, qty, discount in lines],
    }


class TestSaleCreation:
    """Tests for creating sales"""

    def test_total_computed_server_side(self, client, company_headers, customer, item):
        """2 x 100.00 at 18% tax = 236.00"""
        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 2, 0)),
        )

        assert response.status_code == 201
        sale = response.json()
        assert sale["total_amount"] == 236.0
        assert sale["customer"]["id"] == customer["id"]
        assert len(sale["lines"]) == 1
        assert sale["lines"][0]["quantity"] == 2
        assert sale["lines"][0]["item"]["item_code"] == item["item_code"]

    def test_client_total_ignored(self, client, company_headers, customer, item):
        payload = sale_payload(customer["id"], (item["id"], 1, 0))
        payload["total_amount"] = 1.0

        response = client.post("/api/company/sales", headers=company_headers, json=payload)

        assert response.status_code == 201
        assert response.json()["total_amount"] == 118.0

    def test_discount_applied_before_tax(self, client, company_headers, customer, item):
        """(100 - 10%) = 90.00, + 18% tax = 106.20"""
        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 1, 10)),
        )
        assert response.json()["total_amount"] == 106.2

    def test_multiple_lines_keep_order(self, client, company_headers, customer, item):
        second = client.post(
            "/api/company/items",
            headers=company_headers,
            json={"item_code": "SKU-002", "item_name": "Tea 250g", "selling_rate": 50, "mrp": 60},
        ).json()

        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (second["id"], 3, 0), (item["id"], 1, 0)),
        )

        sale = response.json()
        assert [line["line_no"] for line in sale["lines"]] == [1, 2]
        assert [line["item_id"] for line in sale["lines"]] == [second["id"], item["id"]]
        assert sale["total_amount"] == 268.0

    def test_unknown_customer(self, client, company_headers, item):
        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload("no-such-customer", (item["id"], 1, 0)),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Customer no-such-customer not found"

    def test_unknown_item_writes_nothing(self, client, company_headers, customer, item):
        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 1, 0), ("ghost-item", 1, 0)),
        )

        assert response.status_code == 404
        assert client.get("/api/company/sales", headers=company_headers).json()["total"] == 0

    def test_empty_sale_rejected(self, client, company_headers, customer):
        response = client.post(
            "/api/company/sales", headers=company_headers, json={"customer_id": customer["id"], "items": []}
        )
        assert response.status_code == 422

    def test_zero_quantity_rejected(self, client, company_headers, customer, item):
        response = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 0, 0)),
        )
        assert response.status_code == 422


class TestSaleRetrieval:
    """Tests for reading sales and the sales report"""

    def test_get_sale(self, client, company_headers, customer, item):
        created = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 1, 0)),
        ).json()

        response = client.get(f"/api/company/sales/{created['id']}", headers=company_headers)

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert response.json()["lines"][0]["item"]["id"] == item["id"]

    def test_get_missing_sale(self, client, company_headers):
        response = client.get("/api/company/sales/missing", headers=company_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Sale not found"

    def test_report_newest_first_with_grand_total(self, client, company_headers, customer, item):
        first = client.post(
            "/api/company/sales", headers=company_headers, json=sale_payload(customer["id"], (item["id"], 1, 0))
        ).json()
        second = client.post(
            "/api/company/sales", headers=company_headers, json=sale_payload(customer["id"], (item["id"], 2, 0))
        ).json()

        report = client.get("/api/company/sales", headers=company_headers).json()

        assert report["total"] == 2
        assert [s["id"] for s in report["sales"]] == [second["id"], first["id"]]
        assert report["grand_total"] == 354.0

    def test_report_date_range(self, client, company_headers, customer, item, registry, company):
        old = client.post(
            "/api/company/sales", headers=company_headers, json=sale_payload(customer["id"], (item["id"], 1, 0))
        ).json()
        client.post(
            "/api/company/sales", headers=company_headers, json=sale_payload(customer["id"], (item["id"], 2, 0))
        )

        db = registry.get(company["db_name"]).session()
        try:
            sale = db.get(Sale, old["id"])
            sale.created_at = datetime(2025, 1, 15, 10, 0)
            db.commit()
        finally:
            db.close()

        january = client.get(
            "/api/company/sales",
            headers=company_headers,
            params={"start": "2025-01-01T00:00:00", "end": "2025-02-01T00:00:00"},
        ).json()
        assert [s["id"] for s in january["sales"]] == [old["id"]]
        assert january["grand_total"] == 118.0

        recent = client.get(
            "/api/company/sales",
            headers=company_headers,
            params={"start": "2025-02-01T00:00:00"},
        ).json()
        assert recent["total"] == 1


class TestTenantIsolation:
    """Data written by one company is never visible to another"""

    def test_companies_see_only_their_own_data(self, client, admin_headers):
        acme = create_company(client, admin_headers, "billing@acme.com", name="Acme")
        globex = create_company(client, admin_headers, "billing@globex.com", name="Globex")
        acme_headers = login_company(client, acme["email"])
        globex_headers = login_company(client, globex["email"])

        client.post(
            "/api/company/items",
            headers=acme_headers,
            json={"item_code": "SKU-001", "item_name": "Acme Widget", "selling_rate": 100, "mrp": 100},
        )

        assert client.get("/api/company/items", headers=globex_headers).json()["total"] == 0
        assert client.get("/api/company/items", headers=acme_headers).json()["total"] == 1

        # Same item code is free in the other tenant
        response = client.post(
            "/api/company/items",
            headers=globex_headers,
            json={"item_code": "SKU-001", "item_name": "Globex Widget", "selling_rate": 5, "mrp": 5},
        )
        assert response.status_code == 201

    def test_sale_ids_do_not_cross_tenants(
        self, client, company_headers, customer, item, second_company_headers
    ):
        sale = client.post(
            "/api/company/sales",
            headers=company_headers,
            json=sale_payload(customer["id"], (item["id"], 1, 0)),
        ).json()

        response = client.get(f"/api/company/sales/{sale['id']}", headers=second_company_headers)

        assert response.status_code == 404
        assert client.get("/api/company/sales", headers=second_company_headers).json()["total"] == 0


class TestTwoTenantsEndToEnd:
    """Provision two tenants directly and bill in one of them"""

    def test_sale_visible_only_in_its_tenant(self, provisioner, registry):
        from velora.schemas.customer_schemas import CustomerCreate
        from velora.schemas.item_schemas import ItemCreate
        from velora.schemas.sale_schemas import SaleCreate, SaleLineCreate
        from velora.services.customer_service import CustomerService
        from velora.services.item_service import ItemService
        from velora.services.sale_service import SaleService

        provisioner.provision("acme_1")
        provisioner.provision("acme_2")
        acme_1 = registry.get("acme_1").session()
        acme_2 = registry.get("acme_2").session()
        try:
            item = ItemService(acme_1).create_item(
                ItemCreate(item_code="ITM001", item_name="Widget", selling_rate=100, mrp=100, tax=18)
            )
            customer = CustomerService(acme_1).create_customer(CustomerCreate(name="Asha", phone="9000000003"))
            SaleService(acme_1).create_sale(
                SaleCreate(customer_id=customer.id, items=[SaleLineCreate(item_id=item.id, quantity=2)])
            )

            sales, grand_total = SaleService(acme_1).get_report()
            assert len(sales) == 1
            assert sales[0].total_amount == 236.0
            assert grand_total == 236.0

            assert SaleService(acme_2).get_report() == ([], 0)
        finally:
            acme_1.close()
            acme_2.close()
