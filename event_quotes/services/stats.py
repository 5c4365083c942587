"""Dashboard statistics over a list of quotes."""
import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from event_quotes.core.enums import DateRange, Priority, QuoteStatus
from event_quotes.schemas.dashboard import QuoteStats
from event_quotes.services.formatting import as_utc, is_event_upcoming, is_quote_overdue

DASHBOARD_LIST_SIZE = 5

_ACTIVE_STATUSES = (QuoteStatus.BOOKED, QuoteStatus.CONTACTED)
_REVENUE_STATUSES = (QuoteStatus.BOOKED, QuoteStatus.COMPLETED)
_URGENT_PRIORITIES = (Priority.HIGH, Priority.URGENT)


def _one_month_earlier(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def range_start(date_range: DateRange, now: Optional[datetime] = None) -> Optional[datetime]:
    """Earliest created_at included by a dashboard date range, None for all."""
    now = as_utc(now or datetime.now(timezone.utc))
    if date_range == DateRange.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range == DateRange.WEEK:
        return now - timedelta(days=7)
    if date_range == DateRange.MONTH:
        return _one_month_earlier(now)
    return None


def compute_stats(quotes: Sequence[Any], now: Optional[datetime] = None) -> QuoteStats:
    now = as_utc(now or datetime.now(timezone.utc))
    today = now.date()
    stats = QuoteStats(total=len(quotes))

    response_hours = 0.0
    responses = 0
    for quote in quotes:
        status = QuoteStatus(quote.status)
        if status == QuoteStatus.PENDING:
            stats.pending += 1
            if is_quote_overdue(quote.created_at, status, now):
                stats.pending_follow_ups += 1
        elif status == QuoteStatus.CONTACTED:
            stats.contacted += 1
        elif status == QuoteStatus.BOOKED:
            stats.booked += 1
        elif status == QuoteStatus.COMPLETED:
            stats.completed += 1
        elif status == QuoteStatus.CANCELLED:
            stats.cancelled += 1

        if status in _REVENUE_STATUSES:
            stats.total_revenue += quote.quote_amount / 100

        if status in _ACTIVE_STATUSES and is_event_upcoming(quote.event_date, today):
            stats.upcoming_events += 1

        if quote.last_contacted_at and status != QuoteStatus.PENDING:
            elapsed = as_utc(quote.last_contacted_at) - as_utc(quote.created_at)
            response_hours += elapsed.total_seconds() / 3600
            responses += 1

    if responses:
        stats.avg_response_time = response_hours / responses
    if stats.total:
        stats.conversion_rate = (stats.booked + stats.completed) / stats.total * 100
    return stats


def urgent_quotes(quotes: Sequence[Any], now: Optional[datetime] = None) -> List[Any]:
    """Overdue or high/urgent priority quotes, in the order given."""
    picked = [
        q for q in quotes
        if is_quote_overdue(q.created_at, q.status, now) or q.priority in _URGENT_PRIORITIES
    ]
    return picked[:DASHBOARD_LIST_SIZE]


def upcoming_quotes(quotes: Sequence[Any], today: Optional[date] = None) -> List[Any]:
    """Booked or contacted quotes with an event today or later, soonest first."""
    today = today or date.today()
    picked = [
        q for q in quotes
        if q.status in _ACTIVE_STATUSES and is_event_upcoming(q.event_date, today)
    ]
    picked.sort(key=lambda q: q.event_date)
    return picked[:DASHBOARD_LIST_SIZE]
