from typing import Iterable, List

from event_quotes.models.communication import CustomerCommunication
from event_quotes.models.history import QuoteHistory
from event_quotes.schemas.communication import HistoryOut, TimelineEvent
from event_quotes.core.response_builders import build_communication_response
from event_quotes.services.formatting import as_utc


def build_timeline(
    history: Iterable[QuoteHistory],
    communications: Iterable[CustomerCommunication],
) -> List[TimelineEvent]:
    """History entries and communications merged, newest first."""
    events = [
        TimelineEvent(id=h.id, timestamp=h.changed_at, type="history", data=HistoryOut.model_validate(h))
        for h in history
    ]
    events.extend(
        TimelineEvent(id=c.id, timestamp=c.sent_at, type="communication", data=build_communication_response(c))
        for c in communications
    )
    events.sort(key=lambda e: as_utc(e.timestamp), reverse=True)
    return events
