"""Display helpers shared by the CSV export, templates and dashboard."""
from datetime import date, datetime, timezone
from typing import Any, NamedTuple, Optional, Union

from event_quotes.core.config import settings
from event_quotes.core.enums import PaymentStatus, Priority, QuoteStatus

OTHER_EVENT_TYPE = "Other Type of Event"

DateLike = Union[date, datetime, str]


class Badge(NamedTuple):
    bg: str
    text: str
    label: str


STATUS_BADGES = {
    QuoteStatus.PENDING: Badge("bg-yellow-100", "text-yellow-800", "Pending"),
    QuoteStatus.CONTACTED: Badge("bg-blue-100", "text-blue-800", "Contacted"),
    QuoteStatus.BOOKED: Badge("bg-green-100", "text-green-800", "Booked"),
    QuoteStatus.COMPLETED: Badge("bg-purple-100", "text-purple-800", "Completed"),
    QuoteStatus.CANCELLED: Badge("bg-red-100", "text-red-800", "Cancelled"),
}

PRIORITY_BADGES = {
    Priority.LOW: Badge("bg-gray-100", "text-gray-700", "Low"),
    Priority.NORMAL: Badge("bg-blue-100", "text-blue-700", "Normal"),
    Priority.HIGH: Badge("bg-orange-100", "text-orange-700", "High"),
    Priority.URGENT: Badge("bg-red-100", "text-red-700", "Urgent"),
}

PAYMENT_BADGES = {
    PaymentStatus.UNPAID: Badge("bg-red-100", "text-red-800", "Unpaid"),
    PaymentStatus.PARTIAL: Badge("bg-yellow-100", "text-yellow-800", "Partial"),
    PaymentStatus.PAID: Badge("bg-green-100", "text-green-800", "Paid"),
    PaymentStatus.REFUNDED: Badge("bg-gray-100", "text-gray-800", "Refunded"),
}


def _lookup(badges: dict, value: Any, fallback) -> Badge:
    for key, badge in badges.items():
        if value == key or value == key.value:
            return badge
    return badges[fallback]


def status_badge(status: Any) -> Badge:
    return _lookup(STATUS_BADGES, status, QuoteStatus.PENDING)


def priority_badge(priority: Any) -> Badge:
    return _lookup(PRIORITY_BADGES, priority, Priority.NORMAL)


def payment_badge(status: Any) -> Badge:
    return _lookup(PAYMENT_BADGES, status, PaymentStatus.UNPAID)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _to_datetime(value: Union[datetime, str]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_currency(cents: Optional[int]) -> str:
    """Integer cents as "$1,234.56"."""
    return f"${(cents or 0) / 100:,.2f}"


def format_date(value: DateLike) -> str:
    d = _to_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_datetime(value: Union[datetime, str]) -> str:
    dt = _to_datetime(value)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%b} {dt.day}, {dt.year}, {hour}:{dt.minute:02d} {meridiem}"


def event_type_label(quote: Any) -> str:
    event_type = getattr(quote, "event_type", "") or ""
    if event_type == OTHER_EVENT_TYPE:
        return getattr(quote, "custom_event_type", None) or event_type
    return event_type


def is_event_upcoming(event_date: DateLike, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return _to_date(event_date) >= today


def is_quote_overdue(created_at: datetime, status: Any, now: Optional[datetime] = None) -> bool:
    """Pending quotes nobody has touched within the follow-up window."""
    if status != QuoteStatus.PENDING and status != QuoteStatus.PENDING.value:
        return False
    now = as_utc(now or datetime.now(timezone.utc))
    hours = (now - as_utc(_to_datetime(created_at))).total_seconds() / 3600
    return hours > settings.QUOTE_OVERDUE_HOURS


def event_time_remaining(event_date: DateLike, today: Optional[date] = None) -> str:
    today = today or date.today()
    days = (_to_date(event_date) - today).days
    if days < 0:
        return "Past event"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days < 7:
        return f"{days} days"
    if days < 30:
        return f"{days // 7} weeks"
    return f"{days // 30} months"


def template_variables(quote: Any) -> dict:
    quote_amount = getattr(quote, "quote_amount", 0) or 0
    deposit_amount = getattr(quote, "deposit_amount", 0) or 0
    event_date = getattr(quote, "event_date", None)
    return {
        "{customer_name}": getattr(quote, "name", "") or "",
        "{quote_amount}": format_currency(quote_amount),
        "{event_type}": event_type_label(quote),
        "{event_date}": format_date(event_date) if event_date else "",
        "{start_time}": getattr(quote, "start_time", "") or "",
        "{end_time}": getattr(quote, "end_time", "") or "",
        "{event_location}": getattr(quote, "event_location", "") or "",
        "{guest_count}": getattr(quote, "guest_count", "") or "",
        "{deposit_amount}": format_currency(deposit_amount),
        "{balance_due}": format_currency(quote_amount - deposit_amount),
    }


def replace_template_variables(template: str, quote: Any) -> str:
    result = template
    for key, value in template_variables(quote).items():
        result = result.replace(key, str(value))
    return result
