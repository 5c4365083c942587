import csv
import io
from datetime import date
from typing import Any, Iterable, Optional

from event_quotes.services.formatting import event_type_label, format_currency, format_date, format_datetime

CSV_HEADERS = [
    "ID", "Created At", "Customer Name", "Email", "Phone",
    "Event Type", "Event Date", "Start Time", "End Time",
    "Location", "Guest Count", "Quote Amount", "Status",
    "Payment Status", "Priority", "Tags",
]


def export_filename(prefix: str = "quotes-export", today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{prefix}-{today.isoformat()}.csv"


def quote_row(quote: Any) -> list:
    return [
        quote.id,
        format_datetime(quote.created_at),
        quote.name,
        quote.email,
        quote.phone,
        event_type_label(quote),
        format_date(quote.event_date),
        quote.start_time,
        quote.end_time,
        quote.event_location,
        quote.guest_count,
        format_currency(quote.quote_amount),
        str(quote.status),
        str(quote.payment_status),
        str(quote.priority),
        "; ".join(quote.tags or []),
    ]


def export_quotes_csv(quotes: Iterable[Any]) -> str:
    """Render quotes as CSV text; header plain, every data cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_HEADERS) + "\n")
    for quote in quotes:
        writer.writerow(quote_row(quote))
    return buffer.getvalue()
