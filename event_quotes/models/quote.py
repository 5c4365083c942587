from sqlalchemy import Column, String, Boolean, Integer, Date, DateTime, Text, JSON, Enum, ForeignKey
from sqlalchemy.orm import relationship
from event_quotes.models.base import BaseModel
from event_quotes.core.enums import QuoteStatus, Priority, PaymentStatus, DepositStatus


class Quote(BaseModel):
    __tablename__ = "quotes"

    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)
    event_type = Column(String(120), nullable=False)
    custom_event_type = Column(String(120))
    guest_count = Column(String(20), nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    event_location = Column(String(500), nullable=False)
    distance_miles = Column(Integer, nullable=False, default=0)
    water_connection = Column(String(40), nullable=False, default="")
    cleaning_attendant = Column(Boolean, nullable=False, default=False)
    baby_changing_station = Column(Boolean, nullable=False, default=False)
    additional_requests = Column(Text)

    # cents
    quote_amount = Column(Integer, nullable=False, default=0)
    status = Column(Enum(QuoteStatus), nullable=False, default=QuoteStatus.PENDING, index=True)
    priority = Column(Enum(Priority), nullable=False, default=Priority.NORMAL)

    admin_notes = Column(Text)
    customer_notes = Column(Text)
    last_updated_by = Column(ForeignKey("admin_users.id", ondelete="SET NULL"))
    last_contacted_at = Column(DateTime(timezone=True))

    deposit_amount = Column(Integer, nullable=False, default=0)
    deposit_status = Column(Enum(DepositStatus), nullable=False, default=DepositStatus.NOT_REQUIRED)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.UNPAID)
    payment_method = Column(String(40))

    tags = Column(JSON, nullable=False, default=list)
    is_archived = Column(Boolean, nullable=False, default=False)

    history = relationship(
        "QuoteHistory", back_populates="quote", cascade="all, delete-orphan", passive_deletes=True
    )
    communications = relationship(
        "CustomerCommunication", back_populates="quote", cascade="all, delete-orphan", passive_deletes=True
    )
