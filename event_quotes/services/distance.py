import math

from event_quotes.core.pricing_rules import PRICING_RULES, PricingRules


def haversine_miles(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius: float = PRICING_RULES.earth_radius_miles,
) -> float:
    """Great-circle distance in miles between two lat/lng pairs."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dl = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dl / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c


def distance_from_origin(latitude: float, longitude: float, rules: PricingRules = PRICING_RULES) -> int:
    """Whole miles from the dispatch origin, halves rounded up."""
    origin_lat, origin_lon = rules.dispatch_origin
    miles = haversine_miles(origin_lat, origin_lon, latitude, longitude, rules.earth_radius_miles)
    return math.floor(miles + 0.5)
