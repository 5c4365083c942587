"""Quote pricing engine.

One pure function shared by the public quote form and the admin price view,
so both surfaces always agree on the number shown for the same request.
"""
from datetime import datetime, time
from typing import Any, List, Optional

from pydantic import BaseModel

from event_quotes.core.pricing_rules import PRICING_RULES, PricingRules
from event_quotes.schemas.quote import LineItem, PriceBreakdown, QuoteInput


def parse_clock(value: Optional[str]) -> Optional[time]:
    if not value:
        return None
    try:
        parsed = time.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    # offsets such as "10:00Z" are not accepted
    if parsed.tzinfo is not None:
        return None
    return parsed


def event_duration_hours(
    start_time: Optional[str],
    end_time: Optional[str],
    rules: PricingRules = PRICING_RULES,
) -> Optional[float]:
    """Hours between two times of day on the same reference date.

    Returns None when either time is missing or unreadable. An end before the
    start gives a negative duration; events crossing midnight are not wrapped.
    """
    start = parse_clock(start_time)
    end = parse_clock(end_time)
    if start is None or end is None:
        return None
    elapsed = (
        datetime.combine(rules.reference_date, end)
        - datetime.combine(rules.reference_date, start)
    )
    return elapsed.total_seconds() / 3600


def compute_price(source: Any, rules: PricingRules = PRICING_RULES) -> PriceBreakdown:
    """Price a quote request and itemize it.

    `source` may be a QuoteInput, a mapping or any object carrying the
    pricing attributes (e.g. a stored Quote row).
    """
    if isinstance(source, QuoteInput):
        quote = source
    elif isinstance(source, BaseModel):
        quote = QuoteInput.model_validate(source.model_dump())
    else:
        quote = QuoteInput.model_validate(source)
    items: List[LineItem] = []

    duration = event_duration_hours(quote.start_time, quote.end_time, rules)
    if duration is not None:
        threshold = f"{rules.long_event_threshold_hours:g}"
        if duration > rules.long_event_threshold_hours:
            items.append(LineItem(label=f"Base Price (>{threshold} hours)", amount=rules.long_event_base_price))
        else:
            items.append(LineItem(label=f"Base Price (≤{threshold} hours)", amount=rules.short_event_base_price))

    surcharge = rules.guest_surcharges.get(quote.guest_count or "", 0)
    if surcharge:
        items.append(LineItem(label=f"Guest Count Surcharge ({quote.guest_count})", amount=surcharge))

    if quote.distance_miles > rules.free_distance_miles:
        extra_miles = quote.distance_miles - rules.free_distance_miles
        items.append(LineItem(
            label=f"Distance Fee ({extra_miles} mi × ${rules.per_mile_rate})",
            amount=extra_miles * rules.per_mile_rate,
        ))

    if quote.cleaning_attendant:
        items.append(LineItem(label="Cleaning Attendant", amount=rules.cleaning_attendant_price))
    if quote.baby_changing_station:
        items.append(LineItem(label="Baby Changing Station", amount=rules.baby_changing_station_price))

    return PriceBreakdown(breakdown=items, total=sum(item.amount for item in items))
