"""Named constants for quote pricing and delivery distance."""
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Tuple

from event_quotes.core.enums import GuestCount


def _default_guest_surcharges() -> Mapping[str, int]:
    return MappingProxyType({
        GuestCount.UP_TO_50.value: 0,
        GuestCount.UP_TO_100.value: 0,
        GuestCount.UP_TO_150.value: 100,
        GuestCount.UP_TO_200.value: 150,
        GuestCount.UP_TO_300.value: 200,
        GuestCount.UP_TO_500.value: 400,
    })


@dataclass(frozen=True)
class PricingRules:
    # Whole dollars throughout; the tier switches strictly above the threshold.
    long_event_threshold_hours: float = 6.0
    short_event_base_price: int = 995
    long_event_base_price: int = 1300
    guest_surcharges: Mapping[str, int] = field(default_factory=_default_guest_surcharges)
    free_distance_miles: int = 20
    per_mile_rate: int = 3
    cleaning_attendant_price: int = 150
    baby_changing_station_price: int = 100
    # Dispatch office, McKinney TX.
    dispatch_origin: Tuple[float, float] = (33.1972465, -96.6397212)
    earth_radius_miles: float = 3958.8
    reference_date: date = date(2000, 1, 1)


PRICING_RULES = PricingRules()
