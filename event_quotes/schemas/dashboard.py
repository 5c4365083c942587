from typing import List
from pydantic import BaseModel
from event_quotes.core.enums import DateRange
from event_quotes.schemas.quote import QuoteOut


class QuoteStats(BaseModel):
    total: int = 0
    pending: int = 0
    contacted: int = 0
    booked: int = 0
    completed: int = 0
    cancelled: int = 0
    total_revenue: float = 0.0
    upcoming_events: int = 0
    avg_response_time: float = 0.0
    conversion_rate: float = 0.0
    pending_follow_ups: int = 0


class DashboardOut(BaseModel):
    range: DateRange
    stats: QuoteStats
    recent: List[QuoteOut]
    urgent: List[QuoteOut]
    upcoming: List[QuoteOut]
