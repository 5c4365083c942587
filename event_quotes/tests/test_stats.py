import pytest
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from event_quotes.core.enums import DateRange, Priority, QuoteStatus
from event_quotes.services.stats import compute_stats, range_start, upcoming_quotes, urgent_quotes

NOW = datetime(2030, 6, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _quote(id, status, amount=100000, created_hours_ago=1, event_in_days=10,
           priority=Priority.NORMAL, contacted_after_hours=None):
    created_at = NOW - timedelta(hours=created_hours_ago)
    return SimpleNamespace(
        id=id,
        status=status,
        priority=priority,
        quote_amount=amount,
        created_at=created_at,
        event_date=TODAY + timedelta(days=event_in_days),
        last_contacted_at=(
            created_at + timedelta(hours=contacted_after_hours)
            if contacted_after_hours is not None else None
        ),
    )


@pytest.mark.unit
class TestComputeStats:

    def test_empty(self):
        stats = compute_stats([], NOW)
        assert stats.total == 0
        assert stats.conversion_rate == 0.0
        assert stats.avg_response_time == 0.0

    def test_counts_revenue_and_conversion(self):
        quotes = [
            _quote(1, QuoteStatus.PENDING, created_hours_ago=72),
            _quote(2, QuoteStatus.PENDING, created_hours_ago=2),
            _quote(3, QuoteStatus.CONTACTED, contacted_after_hours=4),
            _quote(4, QuoteStatus.BOOKED, amount=179500, contacted_after_hours=2),
            _quote(5, QuoteStatus.COMPLETED, amount=99500, event_in_days=-30),
            _quote(6, QuoteStatus.CANCELLED, amount=500000),
        ]
        stats = compute_stats(quotes, NOW)
        assert stats.total == 6
        assert (stats.pending, stats.contacted, stats.booked, stats.completed, stats.cancelled) == (2, 1, 1, 1, 1)
        assert stats.total_revenue == pytest.approx(1795 + 995)
        assert stats.pending_follow_ups == 1
        assert stats.upcoming_events == 2
        assert stats.avg_response_time == pytest.approx(3.0)
        assert stats.conversion_rate == pytest.approx(2 / 6 * 100)

    def test_string_statuses_are_accepted(self):
        stats = compute_stats([_quote(1, "booked")], NOW)
        assert stats.booked == 1


@pytest.mark.unit
class TestDashboardLists:

    def test_urgent_includes_overdue_and_high_priority(self):
        quotes = [
            _quote(1, QuoteStatus.PENDING, created_hours_ago=100),
            _quote(2, QuoteStatus.CONTACTED, priority=Priority.HIGH),
            _quote(3, QuoteStatus.BOOKED),
            _quote(4, QuoteStatus.PENDING, priority=Priority.URGENT),
        ]
        assert [q.id for q in urgent_quotes(quotes, NOW)] == [1, 2, 4]

    def test_urgent_is_capped_at_five(self):
        quotes = [_quote(i, QuoteStatus.PENDING, priority=Priority.URGENT) for i in range(8)]
        assert len(urgent_quotes(quotes, NOW)) == 5

    def test_upcoming_sorted_soonest_first(self):
        quotes = [
            _quote(1, QuoteStatus.BOOKED, event_in_days=20),
            _quote(2, QuoteStatus.CONTACTED, event_in_days=0),
            _quote(3, QuoteStatus.PENDING, event_in_days=1),
            _quote(4, QuoteStatus.BOOKED, event_in_days=-1),
            _quote(5, QuoteStatus.BOOKED, event_in_days=3),
        ]
        assert [q.id for q in upcoming_quotes(quotes, TODAY)] == [2, 5, 1]


@pytest.mark.unit
class TestRangeStart:

    def test_all_has_no_bound(self):
        assert range_start(DateRange.ALL, NOW) is None

    def test_today_starts_at_midnight(self):
        assert range_start(DateRange.TODAY, NOW) == datetime(2030, 6, 10, tzinfo=timezone.utc)

    def test_week(self):
        assert range_start(DateRange.WEEK, NOW) == NOW - timedelta(days=7)

    def test_month_clamps_day(self):
        end_of_march = datetime(2030, 3, 31, 8, 0, tzinfo=timezone.utc)
        assert range_start(DateRange.MONTH, end_of_march) == datetime(2030, 2, 28, 8, 0, tzinfo=timezone.utc)

    def test_month_wraps_year(self):
        january = datetime(2030, 1, 15, tzinfo=timezone.utc)
        assert range_start(DateRange.MONTH, january) == datetime(2029, 12, 15, tzinfo=timezone.utc)
