"""
Plain-text invoice rendering for receipt printers.

Only the text is produced; sending it to a printer is left to the client.
"""

from velora.config import settings
from velora.models.sale import Sale
from velora.services.sale_service import line_amounts

WIDTH = 32
RULE = "=" * WIDTH
THIN_RULE = "-" * WIDTH


def invoice_number(sale: Sale) -> str:
    """INV<yy><mm><last 4 chars of the sale id, uppercased>"""
    return f"INV{sale.created_at:%y%m}{sale.id[-4:].upper()}"


def _amount_row(label: str, value: float) -> str:
    amount = f"{value:.2f}"
    return f"{label}{amount.rjust(WIDTH - len(label))}"


def render_invoice(sale: Sale) -> str:
    """Render a sale (customer and lines loaded) as fixed-width receipt text"""
    lines = [
        RULE,
        settings.STORE_NAME,
        settings.STORE_ADDRESS,
        f"Phone: {settings.STORE_PHONE}",
        RULE,
        "INVOICE",
        RULE,
        f"InvoiceNo: {invoice_number(sale)}",
        f"Date: {sale.created_at:%d/%m/%Y}",
        THIN_RULE,
        "BILL TO:",
        sale.customer.name,
        f"Phone: {sale.customer.phone}",
        THIN_RULE,
        f"{'Item':<14}{'Qty':>5}{'Amount':>13}",
        THIN_RULE,
    ]

    subtotal = discount = tax = 0.0
    for line in sale.lines:
        amounts = line_amounts(line)
        subtotal += amounts.subtotal
        discount += amounts.discount_amount
        tax += amounts.tax_amount
        lines.append(f"{line.item.item_name[:14]:<14}{line.quantity:>5}{amounts.subtotal:>13.2f}")

    lines.append(THIN_RULE)
    lines.append(_amount_row("Subtotal:", subtotal))
    if discount:
        lines.append(_amount_row("Discount:", -discount))
    lines.append(_amount_row("Tax:", tax))
    lines.append(_amount_row("TOTAL: Rs", sale.total_amount))
    lines.extend([RULE, "Thank you for shopping", "Visit us again soon", RULE, ""])
    return "\n".join(lines)
