from enum import Enum


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    def __str__(self):
        return self.value


class GuestCount(str, Enum):
    UP_TO_50 = "0-50"
    UP_TO_100 = "50-100"
    UP_TO_150 = "100-150"
    UP_TO_200 = "150-200"
    UP_TO_300 = "200-300"
    UP_TO_500 = "300-500"

    def __str__(self):
        return self.value


class QuoteStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    BOOKED = "booked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    def __str__(self):
        return self.value


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"

    def __str__(self):
        return self.value


class DepositStatus(str, Enum):
    NOT_REQUIRED = "not_required"
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"

    def __str__(self):
        return self.value


class CommunicationType(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    PHONE = "phone"
    NOTE = "note"

    def __str__(self):
        return self.value


class CommunicationStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"

    def __str__(self):
        return self.value


class ChangeType(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    STATUS_CHANGE = "status_change"
    NOTE_ADDED = "note_added"

    def __str__(self):
        return self.value


class TemplateCategory(str, Enum):
    QUOTE_RECEIVED = "quote_received"
    QUOTE_FOLLOW_UP = "quote_follow_up"
    BOOKING_CONFIRMED = "booking_confirmed"
    EVENT_REMINDER = "event_reminder"
    THANK_YOU = "thank_you"
    CUSTOM = "custom"

    def __str__(self):
        return self.value


class DateRange(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    def __str__(self):
        return self.value
