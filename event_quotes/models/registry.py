"""Import every model so Base.metadata knows all tables."""
from event_quotes.models.base import Base
from event_quotes.models.admin_user import AdminUser
from event_quotes.models.quote import Quote
from event_quotes.models.history import QuoteHistory
from event_quotes.models.communication import CustomerCommunication
from event_quotes.models.template import EmailTemplate

__all__ = ["Base", "AdminUser", "Quote", "QuoteHistory", "CustomerCommunication", "EmailTemplate"]
