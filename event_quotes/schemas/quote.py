import re
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from event_quotes.core.enums import (
    DepositStatus,
    GuestCount,
    PaymentStatus,
    Priority,
    QuoteStatus,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TRUTHY = {"true", "1", "yes", "on"}
CLOCK_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"


def _coerce_clock(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip() or None
    return None


def _coerce_miles(value: Any) -> int:
    """Whole miles, parsed leniently; anything unreadable counts as zero."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        try:
            return int(match.group(1))
        except ValueError:
            # past the interpreter's digit limit
            return 0
    return 0


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if isinstance(value, (int, float)):
        return bool(value)
    return False


class QuoteInput(BaseModel):
    """Pricing-relevant snapshot of a quote request."""

    model_config = ConfigDict(from_attributes=True)

    start_time: Optional[str] = None
    end_time: Optional[str] = None
    guest_count: Optional[str] = None
    distance_miles: int = 0
    cleaning_attendant: bool = False
    baby_changing_station: bool = False

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _clock(cls, value):
        return _coerce_clock(value)

    @field_validator("guest_count", mode="before")
    @classmethod
    def _bucket(cls, value):
        if isinstance(value, GuestCount):
            return value.value
        return value.strip() or None if isinstance(value, str) else None

    @field_validator("distance_miles", mode="before")
    @classmethod
    def _miles(cls, value):
        return _coerce_miles(value)

    @field_validator("cleaning_attendant", "baby_changing_station", mode="before")
    @classmethod
    def _flag(cls, value):
        return _coerce_flag(value)


class LineItem(BaseModel):
    label: str
    amount: int


class PriceBreakdown(BaseModel):
    breakdown: List[LineItem]
    total: int

    @property
    def amount_cents(self) -> int:
        return self.total * 100


class QuoteCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)
    event_type: str = Field(min_length=1, max_length=120)
    custom_event_type: Optional[str] = None
    guest_count: GuestCount
    event_date: date
    start_time: str = Field(pattern=CLOCK_PATTERN)
    end_time: str = Field(pattern=CLOCK_PATTERN)
    event_location: str
    distance_miles: int = Field(default=0, ge=0)
    water_connection: str = ""
    cleaning_attendant: bool = False
    baby_changing_station: bool = False
    additional_requests: Optional[str] = None


class QuoteUpdate(BaseModel):
    status: Optional[QuoteStatus] = None
    priority: Optional[Priority] = None
    admin_notes: Optional[str] = None
    event_date: Optional[date] = None
    start_time: Optional[str] = Field(default=None, pattern=CLOCK_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=CLOCK_PATTERN)
    event_location: Optional[str] = None
    distance_miles: Optional[int] = Field(default=None, ge=0)
    water_connection: Optional[str] = None
    cleaning_attendant: Optional[bool] = None
    baby_changing_station: Optional[bool] = None
    quote_amount: Optional[int] = Field(default=None, ge=0)
    guest_count: Optional[GuestCount] = None
    deposit_amount: Optional[int] = Field(default=None, ge=0)
    deposit_status: Optional[DepositStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[str] = None
    tags: Optional[List[str]] = None
    customer_notes: Optional[str] = None
    is_archived: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return None
        tags: List[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tags


class QuoteOut(BaseModel):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    name: str
    email: str
    phone: str
    event_type: str
    custom_event_type: Optional[str] = None
    guest_count: str
    event_date: date
    start_time: str
    end_time: str
    event_location: str
    distance_miles: int
    water_connection: str
    cleaning_attendant: bool
    baby_changing_station: bool
    additional_requests: Optional[str] = None
    quote_amount: int
    status: QuoteStatus
    admin_notes: Optional[str] = None
    last_updated_by: Optional[int] = None
    deposit_amount: int
    deposit_status: DepositStatus
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    priority: Priority
    tags: List[str]
    customer_notes: Optional[str] = None
    last_contacted_at: Optional[datetime] = None
    is_archived: bool


class QuoteSubmitted(BaseModel):
    quote_id: Optional[int] = None
    saved: bool
    warning: Optional[str] = None
    price: PriceBreakdown


class PriceCheck(BaseModel):
    quote_id: int
    breakdown: List[LineItem]
    computed_total: int
    computed_amount: int
    stored_amount: int
    matches_stored: bool
    deposit_amount: int
    balance_due: int


class AddressSuggestion(BaseModel):
    display_name: str
    latitude: float
    longitude: float
    distance_miles: int


class CalendarMonth(BaseModel):
    year: int
    month: int
    days: Dict[str, List[QuoteOut]]
