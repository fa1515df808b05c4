from datetime import datetime

from velora.models import CustomerMaster, ItemMaster, Sale, SaleItem
from velora.services.invoice_service import WIDTH, invoice_number, render_invoice


def build_sale() -> Sale:
    customer = CustomerMaster(name="Ravi Kumar", phone="9000000001")
    rice = ItemMaster(item_code="R1", item_name="Basmati Rice Premium 5kg", selling_rate=100, mrp=120, tax=18)
    tea = ItemMaster(item_code="T1", item_name="Tea", selling_rate=50, mrp=60, tax=0)
    return Sale(
        id="9b1c2f4e-0000-4000-8000-00000000ab12",
        customer=customer,
        total_amount=312.4,
        created_at=datetime(2026, 3, 9, 14, 30),
        lines=[
            SaleItem(line_no=1, item=rice, quantity=2, discount=10),
            SaleItem(line_no=2, item=tea, quantity=2, discount=0),
        ],
    )


class TestInvoice:
    """Tests for plain-text invoice rendering"""

    def test_invoice_number(self):
        assert invoice_number(build_sale()) == "INV2603AB12"

    def test_render_invoice(self):
        text = render_invoice(build_sale())
        lines = text.splitlines()

        assert "INVOICE" in lines
        assert "InvoiceNo: INV2603AB12" in lines
        assert "Date: 09/03/2026" in lines
        assert "Ravi Kumar" in lines
        assert "Subtotal:" + "300.00".rjust(WIDTH - len("Subtotal:")) in lines
        assert "Discount:" + "-20.00".rjust(WIDTH - len("Discount:")) in lines
        assert "Tax:" + "32.40".rjust(WIDTH - len("Tax:")) in lines
        assert "TOTAL: Rs" + "312.40".rjust(WIDTH - len("TOTAL: Rs")) in lines
        assert all(len(line) <= WIDTH for line in lines)

    def test_long_item_names_truncated(self):
        text = render_invoice(build_sale())
        assert "Basmati Rice P" in text
        assert "Basmati Rice Premium" not in text

    def test_no_discount_line_without_discount(self):
        sale = build_sale()
        sale.lines[0].discount = 0

        assert "Discount:" not in render_invoice(sale)


def test_invoice_endpoint(client, company_headers, customer, item):
    sale = client.post(
        "/api/company/sales",
        headers=company_headers,
        json={"customer_id": customer["id"], "items": [{"item_id": item["id"], "quantity": 2}]},
    ).json()

    response = client.get(f"/api/company/sales/{sale['id']}/invoice", headers=company_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "TOTAL: Rs" in response.text
    assert "236.00" in response.text
