from datetime import datetime

import pytest

from velora.models import CustomerMaster, ItemMaster, Sale, SaleItem
from velora.services.dashboard_service import DashboardService, growth_percent, month_start


def add_sale(db, customer, item, amount: float, created_at: datetime) -> Sale:
    sale = Sale(
        customer_id=customer.id,
        total_amount=amount,
        created_at=created_at,
        lines=[SaleItem(line_no=1, item_id=item.id, quantity=1, discount=0)],
    )
    db.add(sale)
    db.commit()
    return sale


@pytest.fixture
def catalogue(tenant_db):
    customer = CustomerMaster(name="Ravi Kumar", phone="9000000001")
    item = ItemMaster(item_code="SKU-1", item_name="Rice", selling_rate=100, mrp=120, tax=0)
    tenant_db.add_all([customer, item])
    tenant_db.commit()
    return customer, item


class TestMonthHelpers:
    """Tests for month boundary and growth helpers"""

    @pytest.mark.parametrize(
        "year, month, expected",
        [
            (2026, 1, datetime(2026, 1, 1)),
            (2026, 0, datetime(2025, 12, 1)),
            (2026, 13, datetime(2027, 1, 1)),
        ],
    )
    def test_month_start(self, year, month, expected):
        assert month_start(year, month) == expected

    def test_growth(self):
        assert growth_percent(150, 100) == 50.0
        assert growth_percent(50, 100) == -50.0
        assert growth_percent(10, 0) == 100.0
        assert growth_percent(0, 0) == 0.0


class TestDashboardService:
    """Tests for the dashboard statistics"""

    def test_empty_tenant(self, tenant_db):
        stats = DashboardService(tenant_db).get_stats(now=datetime(2026, 3, 10))

        assert stats.total_sales == 0.0
        assert stats.total_customers == 0
        assert stats.total_items == 0
        assert stats.monthly_growth == 0.0

    def test_month_over_month_growth(self, tenant_db, catalogue):
        customer, item = catalogue
        add_sale(tenant_db, customer, item, 200.0, datetime(2026, 2, 14))
        add_sale(tenant_db, customer, item, 100.0, datetime(2026, 3, 2))
        add_sale(tenant_db, customer, item, 200.0, datetime(2026, 3, 9))
        add_sale(tenant_db, customer, item, 999.0, datetime(2025, 3, 9))

        stats = DashboardService(tenant_db).get_stats(now=datetime(2026, 3, 10))

        assert stats.total_sales == 1499.0
        assert stats.total_customers == 1
        assert stats.total_items == 1
        assert stats.monthly_growth == 50.0

    def test_january_compares_with_december(self, tenant_db, catalogue):
        customer, item = catalogue
        add_sale(tenant_db, customer, item, 100.0, datetime(2025, 12, 31, 23, 59))
        add_sale(tenant_db, customer, item, 50.0, datetime(2026, 1, 1))

        stats = DashboardService(tenant_db).get_stats(now=datetime(2026, 1, 20))

        assert stats.monthly_growth == -50.0


def test_dashboard_endpoint(client, company_headers, customer, item):
    client.post(
        "/api/company/sales",
        headers=company_headers,
        json={"customer_id": customer["id"], "items": [{"item_id": item["id"], "quantity": 1}]},
    )

    response = client.get("/api/company/dashboard/stats", headers=company_headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["total_sales"] == 118.0
    assert stats["total_customers"] == 1
    assert stats["total_items"] == 1
    assert stats["monthly_growth"] == 100.0
