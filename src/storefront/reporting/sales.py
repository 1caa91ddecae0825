"""Sales report for a date range, rendered through the document writer."""

from datetime import UTC, date, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.dispatch.writer import get_writer
from storefront.order.order import Order
from storefront.shared.money import format_amount

REPORT_TITLE = "AISHWARYA COLLECTIONS - SALES REPORT"
NO_ORDERS_MESSAGE = "No orders found for the selected date range."
COLUMNS = ("Order ID", "Date", "Customer", "Address", "Payment", "Total")
ROWS_PER_PAGE = 40


def report_rows(orders) -> list[tuple]:
    return [
        (
            str(order.id)[:8],
            order.created_at.strftime("%d/%m/%Y"),
            order.shipping.customer_name,
            f"{order.shipping.address}, {order.shipping.city}",
            order.payment_method or "",
            f"Rs. {format_amount(order.total)}",
        )
        for order in orders
    ]


def _table(rows) -> list[str]:
    widths = [max(len(str(row[i])) for row in (COLUMNS, *rows)) for i in range(len(COLUMNS))]

    def line(cells):
        return " | ".join(str(cell).ljust(width) for cell, width in zip(cells, widths))

    return [line(COLUMNS), "-+-".join("-" * width for width in widths), *(line(row) for row in rows)]


def sales_report(start: date, end: date) -> bytes:
    """Orders created from ``start`` to ``end`` inclusive, newest first."""
    if start > end:
        raise ValidationError({"start_date": ["Start date must not be after end date"]})

    orders = current_domain.repository_for(Order).created_between(start, end)
    if not orders:
        raise ObjectNotFoundError({"_entity": NO_ORDERS_MESSAGE})

    header = [
        f"Period: {start.isoformat()} to {end.isoformat()}",
        f"Generated on: {datetime.now(UTC).strftime('%d/%m/%Y %H:%M')} UTC",
        "",
    ]
    rows = report_rows(orders)
    pages = []
    for offset in range(0, len(rows), ROWS_PER_PAGE):
        chunk = rows[offset : offset + ROWS_PER_PAGE]
        pages.append((header if offset == 0 else []) + _table(chunk))

    return get_writer().render(REPORT_TITLE, pages)
