"""Field-level audit trail for quotes"""
import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from event_quotes.models.history import QuoteHistory
from event_quotes.core.enums import ChangeType
from event_quotes.core.metrics import history_entries_created

logger = logging.getLogger(__name__)

_FIELD_CHANGE_TYPES = {
    "status": ChangeType.STATUS_CHANGE,
    "admin_notes": ChangeType.NOTE_ADDED,
}


class FieldChange(NamedTuple):
    field_name: str
    old_value: Optional[str]
    new_value: Optional[str]
    change_type: ChangeType


def stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value, sort_keys=True)
    return str(value)


def diff_changes(current: Any, updates: Dict[str, Any]) -> List[FieldChange]:
    """Changes `updates` would make to `current`, one per differing field."""
    changes = []
    for field_name, new in updates.items():
        old_value = stringify(getattr(current, field_name, None))
        new_value = stringify(new)
        if old_value == new_value:
            continue
        change_type = _FIELD_CHANGE_TYPES.get(field_name, ChangeType.UPDATE)
        changes.append(FieldChange(field_name, old_value, new_value, change_type))
    return changes


def add_history(
    db: AsyncSession,
    quote_id: int,
    changes: List[FieldChange],
    admin_id: Optional[int] = None,
) -> List[QuoteHistory]:
    entries = []
    for change in changes:
        entry = QuoteHistory(
            quote_id=quote_id,
            changed_by=admin_id,
            field_name=change.field_name,
            old_value=change.old_value,
            new_value=change.new_value,
            change_type=change.change_type,
        )
        db.add(entry)
        entries.append(entry)
        history_entries_created.labels(change_type=str(change.change_type)).inc()
    return entries


def add_creation(db: AsyncSession, quote, admin_id: Optional[int] = None) -> QuoteHistory:
    change = FieldChange("status", None, stringify(quote.status), ChangeType.CREATE)
    return add_history(db, quote.id, [change], admin_id)[0]
