from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from event_quotes.models.base import BaseModel, utcnow
from event_quotes.core.enums import ChangeType


class QuoteHistory(BaseModel):
    __tablename__ = "quote_history"

    quote_id = Column(ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    changed_by = Column(ForeignKey("admin_users.id", ondelete="SET NULL"))
    changed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    field_name = Column(String(64), nullable=False)
    old_value = Column(Text)
    new_value = Column(Text)
    change_type = Column(Enum(ChangeType), nullable=False)

    quote = relationship("Quote", back_populates="history")
