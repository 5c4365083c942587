from typing import List
from event_quotes.models.quote import Quote
from event_quotes.models.communication import CustomerCommunication
from event_quotes.models.admin_user import AdminUser
from event_quotes.schemas.quote import QuoteOut
from event_quotes.schemas.communication import CommunicationOut
from event_quotes.schemas.auth import AdminOut


def build_quote_response(quote: Quote) -> QuoteOut:
    return QuoteOut(
        id=quote.id,
        created_at=quote.created_at,
        updated_at=quote.updated_at,
        name=quote.name,
        email=quote.email,
        phone=quote.phone,
        event_type=quote.event_type,
        custom_event_type=quote.custom_event_type,
        guest_count=quote.guest_count,
        event_date=quote.event_date,
        start_time=quote.start_time,
        end_time=quote.end_time,
        event_location=quote.event_location,
        distance_miles=quote.distance_miles,
        water_connection=quote.water_connection,
        cleaning_attendant=quote.cleaning_attendant,
        baby_changing_station=quote.baby_changing_station,
        additional_requests=quote.additional_requests,
        quote_amount=quote.quote_amount,
        status=quote.status,
        admin_notes=quote.admin_notes,
        last_updated_by=quote.last_updated_by,
        deposit_amount=quote.deposit_amount,
        deposit_status=quote.deposit_status,
        payment_status=quote.payment_status,
        payment_method=quote.payment_method,
        priority=quote.priority,
        tags=list(quote.tags or []),
        customer_notes=quote.customer_notes,
        last_contacted_at=quote.last_contacted_at,
        is_archived=quote.is_archived,
    )


def build_communication_response(communication: CustomerCommunication) -> CommunicationOut:
    return CommunicationOut(
        id=communication.id,
        quote_id=communication.quote_id,
        sent_by=communication.sent_by,
        sent_at=communication.sent_at,
        communication_type=communication.communication_type,
        subject=communication.subject,
        message=communication.message,
        status=communication.status,
        metadata=dict(communication.extra or {}),
    )


def build_admin_response(admin: AdminUser) -> AdminOut:
    return AdminOut(
        id=admin.id,
        email=admin.email,
        full_name=admin.full_name,
        role=admin.role,
        is_active=admin.is_active,
        last_login=admin.last_login,
    )


def build_quote_response_list(quotes: list) -> List[QuoteOut]:
    return [build_quote_response(quote) for quote in quotes]
