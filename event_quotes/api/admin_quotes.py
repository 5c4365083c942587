import calendar
import logging
from datetime import date
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from event_quotes.core.auth_utils import get_quote_or_404
from event_quotes.core.enums import DateRange, PaymentStatus, Priority, QuoteStatus
from event_quotes.core.metrics import price_drift_detected
from event_quotes.core.quote_history import add_history, diff_changes
from event_quotes.core.response_builders import build_quote_response, build_quote_response_list
from event_quotes.core.security import get_current_admin
from event_quotes.db.session import get_db
from event_quotes.models.communication import CustomerCommunication
from event_quotes.models.history import QuoteHistory
from event_quotes.models.quote import Quote
from event_quotes.schemas.communication import TimelineEvent
from event_quotes.schemas.dashboard import DashboardOut
from event_quotes.schemas.quote import CalendarMonth, PriceCheck, QuoteOut, QuoteUpdate
from event_quotes.services.csv_export import export_filename, export_quotes_csv
from event_quotes.services.pricing import compute_price
from event_quotes.services.stats import DASHBOARD_LIST_SIZE, compute_stats, range_start, upcoming_quotes, urgent_quotes
from event_quotes.services.timeline import build_timeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])

SortField = Literal["created_at", "event_date", "name", "quote_amount", "status"]

# Columns an admin may clear by sending null.
_NULLABLE_FIELDS = {"admin_notes", "payment_method", "customer_notes"}


class QuoteFilters:
    def __init__(
        self,
        status: Optional[QuoteStatus] = Query(None),
        priority: Optional[Priority] = Query(None),
        payment_status: Optional[PaymentStatus] = Query(None),
        date_from: Optional[date] = Query(None),
        date_to: Optional[date] = Query(None),
        min_amount: Optional[int] = Query(None, ge=0),
        max_amount: Optional[int] = Query(None, ge=0),
        search: Optional[str] = Query(None),
        tags: List[str] = Query([]),
        include_archived: bool = Query(False),
        sort: SortField = Query("created_at"),
        direction: Literal["asc", "desc"] = Query("desc"),
    ):
        self.status = status
        self.priority = priority
        self.payment_status = payment_status
        self.date_from = date_from
        self.date_to = date_to
        self.min_amount = min_amount
        self.max_amount = max_amount
        self.search = search.strip() if search else None
        self.tags = [t.strip() for t in tags if t.strip()]
        self.include_archived = include_archived
        self.sort = sort
        self.direction = direction

    def apply(self, q):
        if not self.include_archived:
            q = q.where(Quote.is_archived.is_(False))
        if self.status:
            q = q.where(Quote.status == self.status)
        if self.priority:
            q = q.where(Quote.priority == self.priority)
        if self.payment_status:
            q = q.where(Quote.payment_status == self.payment_status)
        if self.date_from:
            q = q.where(Quote.event_date >= self.date_from)
        if self.date_to:
            q = q.where(Quote.event_date <= self.date_to)
        if self.min_amount is not None:
            q = q.where(Quote.quote_amount >= self.min_amount)
        if self.max_amount is not None:
            q = q.where(Quote.quote_amount <= self.max_amount)
        if self.search:
            pattern = f"%{self.search}%"
            q = q.where(or_(
                Quote.name.ilike(pattern),
                Quote.email.ilike(pattern),
                Quote.event_type.ilike(pattern),
                Quote.phone.contains(self.search),
            ))
        column = getattr(Quote, self.sort)
        order = column.asc() if self.direction == "asc" else column.desc()
        return q.order_by(order, Quote.id.desc())

    def matches_tags(self, quote: Quote) -> bool:
        return all(tag in (quote.tags or []) for tag in self.tags)


async def _load_quotes(db: AsyncSession, filters: QuoteFilters, limit: Optional[int] = None, offset: int = 0):
    q = filters.apply(select(Quote))
    if not filters.tags and limit is not None:
        q = q.limit(limit).offset(offset)
    res = await db.execute(q)
    quotes = res.scalars().all()
    if filters.tags:
        # tags live in a JSON column; filter after loading
        quotes = [quote for quote in quotes if filters.matches_tags(quote)]
        if limit is not None:
            quotes = quotes[offset:offset + limit]
    return quotes


@router.get("/quotes", response_model=List[QuoteOut])
async def list_quotes(
    filters: QuoteFilters = Depends(),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    quotes = await _load_quotes(db, filters, limit, offset)
    return build_quote_response_list(quotes)


@router.get("/quotes/export")
async def export_quotes(filters: QuoteFilters = Depends(), db: AsyncSession = Depends(get_db)):
    quotes = await _load_quotes(db, filters)
    filename = export_filename()
    return Response(
        content=export_quotes_csv(quotes),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/quotes/calendar", response_model=CalendarMonth)
async def quotes_calendar(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    res = await db.execute(
        select(Quote)
        .where(Quote.event_date >= first, Quote.event_date <= last)
        .order_by(Quote.event_date.asc(), Quote.start_time.asc(), Quote.id.asc())
    )
    days = {}
    for quote in res.scalars().all():
        days.setdefault(quote.event_date.isoformat(), []).append(build_quote_response(quote))
    return CalendarMonth(year=year, month=month, days=days)


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(
    date_range: DateRange = Query(DateRange.ALL, alias="range"),
    db: AsyncSession = Depends(get_db),
):
    q = select(Quote)
    start = range_start(date_range)
    if start is not None:
        q = q.where(Quote.created_at >= start)
    res = await db.execute(q.order_by(Quote.created_at.desc(), Quote.id.desc()))
    quotes = res.scalars().all()

    return DashboardOut(
        range=date_range,
        stats=compute_stats(quotes),
        recent=build_quote_response_list(quotes[:DASHBOARD_LIST_SIZE]),
        urgent=build_quote_response_list(urgent_quotes(quotes)),
        upcoming=build_quote_response_list(upcoming_quotes(quotes)),
    )


@router.get("/quotes/{quote_id}", response_model=QuoteOut)
async def get_quote(quote_id: int, db: AsyncSession = Depends(get_db)):
    quote = await get_quote_or_404(db, quote_id)
    return build_quote_response(quote)


@router.patch("/quotes/{quote_id}", response_model=QuoteOut)
async def update_quote(
    quote_id: int,
    payload: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin=Depends(get_current_admin),
):
    quote = await get_quote_or_404(db, quote_id)

    updates = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }
    if "guest_count" in updates:
        updates["guest_count"] = updates["guest_count"].value

    changes = diff_changes(quote, updates)
    if not changes:
        return build_quote_response(quote)

    for change in changes:
        setattr(quote, change.field_name, updates[change.field_name])
    quote.last_updated_by = current_admin.id
    add_history(db, quote.id, changes, current_admin.id)

    await db.commit()
    await db.refresh(quote)
    logger.info(f"Quote {quote.id} updated by admin {current_admin.id}: {[c.field_name for c in changes]}")
    return build_quote_response(quote)


@router.delete("/quotes/{quote_id}")
async def delete_quote(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin=Depends(get_current_admin),
):
    quote = await get_quote_or_404(db, quote_id)
    await db.delete(quote)
    await db.commit()
    logger.info(f"Quote {quote_id} deleted by admin {current_admin.id}")
    return {"deleted": True, "id": quote_id}


@router.get("/quotes/{quote_id}/price", response_model=PriceCheck)
async def price_check(quote_id: int, db: AsyncSession = Depends(get_db)):
    """Recomputed price next to the stored amount; the stored amount is what gets billed."""
    quote = await get_quote_or_404(db, quote_id)
    price = compute_price(quote)
    matches = price.amount_cents == quote.quote_amount
    if not matches:
        price_drift_detected.inc()
        logger.info(
            f"Quote {quote.id} stored amount {quote.quote_amount} differs from computed {price.amount_cents}"
        )
    return PriceCheck(
        quote_id=quote.id,
        breakdown=price.breakdown,
        computed_total=price.total,
        computed_amount=price.amount_cents,
        stored_amount=quote.quote_amount,
        matches_stored=matches,
        deposit_amount=quote.deposit_amount,
        balance_due=quote.quote_amount - quote.deposit_amount,
    )


@router.get("/quotes/{quote_id}/timeline", response_model=List[TimelineEvent])
async def quote_timeline(quote_id: int, db: AsyncSession = Depends(get_db)):
    await get_quote_or_404(db, quote_id)
    history = await db.execute(
        select(QuoteHistory).where(QuoteHistory.quote_id == quote_id).order_by(QuoteHistory.changed_at.desc())
    )
    communications = await db.execute(
        select(CustomerCommunication)
        .where(CustomerCommunication.quote_id == quote_id)
        .order_by(CustomerCommunication.sent_at.desc())
    )
    return build_timeline(history.scalars().all(), communications.scalars().all())
