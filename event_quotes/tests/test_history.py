import pytest
from datetime import date, datetime, timezone
from types import SimpleNamespace

from event_quotes.core.enums import ChangeType, CommunicationStatus, CommunicationType, QuoteStatus
from event_quotes.core.quote_history import FieldChange, diff_changes, stringify
from event_quotes.models.registry import CustomerCommunication, QuoteHistory
from event_quotes.services.timeline import build_timeline


def _current(**kwargs):
    data = dict(
        status=QuoteStatus.PENDING,
        admin_notes=None,
        event_date=date(2030, 6, 15),
        quote_amount=99500,
        cleaning_attendant=False,
        tags=["vip"],
    )
    data.update(kwargs)
    return SimpleNamespace(**data)


@pytest.mark.unit
class TestDiffChanges:

    def test_unchanged_fields_are_skipped(self):
        updates = {"status": QuoteStatus.PENDING, "quote_amount": 99500, "tags": ["vip"]}
        assert diff_changes(_current(), updates) == []

    def test_status_change_type(self):
        changes = diff_changes(_current(), {"status": QuoteStatus.BOOKED})
        assert changes == [FieldChange("status", "pending", "booked", ChangeType.STATUS_CHANGE)]

    def test_admin_notes_change_type(self):
        changes = diff_changes(_current(), {"admin_notes": "Called, left voicemail"})
        assert changes == [FieldChange("admin_notes", None, "Called, left voicemail", ChangeType.NOTE_ADDED)]

    def test_other_fields_are_updates(self):
        changes = diff_changes(_current(), {
            "event_date": date(2030, 7, 1),
            "cleaning_attendant": True,
            "tags": ["vip", "repeat"],
        })
        assert changes == [
            FieldChange("event_date", "2030-06-15", "2030-07-01", ChangeType.UPDATE),
            FieldChange("cleaning_attendant", "False", "True", ChangeType.UPDATE),
            FieldChange("tags", '["vip"]', '["vip", "repeat"]', ChangeType.UPDATE),
        ]

    def test_stringify(self):
        assert stringify(None) is None
        assert stringify(QuoteStatus.BOOKED) == "booked"
        assert stringify(150) == "150"


@pytest.mark.unit
def test_timeline_merges_newest_first():
    history = [
        QuoteHistory(id=1, quote_id=9, changed_at=datetime(2030, 6, 1, 9, 0), field_name="status",
                     old_value=None, new_value="pending", change_type=ChangeType.CREATE),
        QuoteHistory(id=2, quote_id=9, changed_at=datetime(2030, 6, 3, 9, 0), field_name="status",
                     old_value="pending", new_value="contacted", change_type=ChangeType.STATUS_CHANGE),
    ]
    communications = [
        CustomerCommunication(id=5, quote_id=9, sent_at=datetime(2030, 6, 2, 9, 0, tzinfo=timezone.utc),
                              communication_type=CommunicationType.PHONE, message="Left voicemail",
                              status=CommunicationStatus.SENT, extra={}),
    ]
    events = build_timeline(history, communications)
    assert [(e.type, e.id) for e in events] == [("history", 2), ("communication", 5), ("history", 1)]
    assert events[1].data.message == "Left voicemail"
