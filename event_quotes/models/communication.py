from sqlalchemy import Column, String, Text, DateTime, Enum, JSON, ForeignKey
from sqlalchemy.orm import relationship
from event_quotes.models.base import BaseModel, utcnow
from event_quotes.core.enums import CommunicationType, CommunicationStatus


class CustomerCommunication(BaseModel):
    __tablename__ = "customer_communications"

    quote_id = Column(ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    sent_by = Column(ForeignKey("admin_users.id", ondelete="SET NULL"))
    sent_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    communication_type = Column(Enum(CommunicationType), nullable=False)
    subject = Column(String(255))
    message = Column(Text, nullable=False)
    status = Column(Enum(CommunicationStatus), nullable=False, default=CommunicationStatus.SENT)
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", JSON, nullable=False, default=dict)

    quote = relationship("Quote", back_populates="communications")
