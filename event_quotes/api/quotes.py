"""Public quote request endpoints"""
import json
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from event_quotes.core.config import settings
from event_quotes.core.enums import QuoteStatus
from event_quotes.core.metrics import cache_hits, cache_misses, quotes_submitted, quote_total_dollars
from event_quotes.core.quote_history import add_creation
from event_quotes.core.rate_limit import check_rate_limit
from event_quotes.core.redis import get_redis
from event_quotes.db.session import get_db
from event_quotes.models.quote import Quote
from event_quotes.schemas.quote import (
    AddressSuggestion,
    PriceBreakdown,
    QuoteCreate,
    QuoteInput,
    QuoteSubmitted,
)
from event_quotes.services.formatting import OTHER_EVENT_TYPE
from event_quotes.services.geocode import search_addresses
from event_quotes.services.pricing import compute_price
from event_quotes.utils.hashing import cache_key
from event_quotes.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


def _unsaved_warning() -> str:
    return (
        "Your quote was calculated but could not be saved. "
        f"Please contact us directly at {settings.CONTACT_PHONE}."
    )


@router.post("/estimate", response_model=PriceBreakdown)
async def estimate_quote(req: QuoteInput):

    key = cache_key("price", req.model_dump())
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(key)
            if cached:
                cache_hits.labels(cache="price").inc()
                return PriceBreakdown(**json.loads(cached))
            cache_misses.labels(cache="price").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    result = compute_price(req)

    if redis is not None:
        try:
            await redis.set(
                key,
                json.dumps(result.model_dump()),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result


@router.post("", response_model=QuoteSubmitted)
async def submit_quote(
    payload: QuoteCreate,
    request: Request,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    client_host = request.client.host if request.client else "unknown"
    await check_rate_limit(client_host)

    if idempotency_key:
        prev = await get_idempotent(idempotency_key)
        if prev:
            return prev

    price = compute_price(payload)
    quote_total_dollars.observe(price.total)

    quote = Quote(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        event_type=payload.event_type,
        custom_event_type=payload.custom_event_type if payload.event_type == OTHER_EVENT_TYPE else None,
        guest_count=payload.guest_count.value,
        event_date=payload.event_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        event_location=payload.event_location,
        distance_miles=payload.distance_miles,
        water_connection=payload.water_connection,
        cleaning_attendant=payload.cleaning_attendant,
        baby_changing_station=payload.baby_changing_station,
        additional_requests=payload.additional_requests or None,
        quote_amount=price.amount_cents,
        status=QuoteStatus.PENDING,
        tags=[],
    )

    # A failed write still shows the customer their price.
    try:
        db.add(quote)
        await db.flush()
        add_creation(db, quote)
        await db.commit()
    except (SQLAlchemyError, OSError) as e:
        await db.rollback()
        logger.error(f"Quote for {payload.email} not saved: {e}", exc_info=True)
        quotes_submitted.labels(saved="false").inc()
        return QuoteSubmitted(saved=False, warning=_unsaved_warning(), price=price)

    quotes_submitted.labels(saved="true").inc()
    logger.info(f"Quote {quote.id} saved, total ${price.total}")

    out = QuoteSubmitted(quote_id=quote.id, saved=True, price=price)
    if idempotency_key:
        await set_idempotent(idempotency_key, out.model_dump())
    return out


@router.get("/address-suggestions", response_model=List[AddressSuggestion])
async def address_suggestions(q: str = Query("", max_length=300)):
    return await search_addresses(q)
