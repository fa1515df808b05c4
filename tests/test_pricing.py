import pytest

from velora.services.sale_service import calculate_line


class TestCalculateLine:
    """Tests for the sale-line amount formula"""

    def test_tax_only(self):
        amounts = calculate_line(quantity=2, rate=100, discount=0, tax=18)

        assert amounts.subtotal == 200.0
        assert amounts.discount_amount == 0.0
        assert amounts.tax_amount == 36.0
        assert amounts.total == 236.0

    def test_discount_before_tax(self):
        amounts = calculate_line(quantity=1, rate=100, discount=10, tax=18)

        assert amounts.discount_amount == 10.0
        assert amounts.tax_amount == 16.2
        assert amounts.total == 106.2

    def test_no_tax_no_discount(self):
        assert calculate_line(quantity=3, rate=50, discount=0, tax=0).total == 150.0

    def test_full_discount(self):
        amounts = calculate_line(quantity=4, rate=25, discount=100, tax=18)
        assert amounts.total == 0.0

    @pytest.mark.parametrize(
        "quantity, rate, discount, tax, expected",
        [
            (3, 33.33, 0, 5, 104.99),
            (1, 19.99, 12.5, 12, 19.59),
            (7, 0.1, 0, 0, 0.7),
        ],
    )
    def test_rounded_to_two_places(self, quantity, rate, discount, tax, expected):
        assert calculate_line(quantity, rate, discount, tax).total == expected
