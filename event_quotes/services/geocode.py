"""Address autocomplete backed by OpenStreetMap Nominatim.

`search_addresses(query)` returns candidate addresses with their distance
from the dispatch origin, or an empty list when the lookup is unavailable.
Results are cached in Redis per normalized query when Redis is connected.
"""
import json
import logging
from typing import List, Optional

import httpx

from event_quotes.core.config import settings
from event_quotes.core.metrics import cache_hits, cache_misses, geocode_lookups
from event_quotes.core.redis import get_redis
from event_quotes.schemas.quote import AddressSuggestion
from event_quotes.services.distance import distance_from_origin

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


def _cache_key(query: str) -> str:
    return f"geo:search:{query.strip().lower()}"


def _parse_candidates(data) -> List[AddressSuggestion]:
    suggestions = []
    for item in data or []:
        try:
            lat = float(item["lat"])
            lon = float(item["lon"])
        except (KeyError, TypeError, ValueError):
            continue
        suggestions.append(AddressSuggestion(
            display_name=item.get("display_name", ""),
            latitude=lat,
            longitude=lon,
            distance_miles=distance_from_origin(lat, lon),
        ))
    return suggestions


async def _cached(query: str) -> Optional[List[AddressSuggestion]]:
    redis = get_redis()
    if redis is None:
        return None
    try:
        raw = await redis.get(_cache_key(query))
    except Exception as e:
        logger.warning(f"Geocode cache read failed: {e}")
        return None
    if not raw:
        cache_misses.labels(cache="geocode").inc()
        return None
    cache_hits.labels(cache="geocode").inc()
    return [AddressSuggestion(**item) for item in json.loads(raw)]


async def _store(query: str, suggestions: List[AddressSuggestion]) -> None:
    redis = get_redis()
    if redis is None:
        return
    try:
        await redis.set(
            _cache_key(query),
            json.dumps([s.model_dump() for s in suggestions]),
            ex=settings.GEOCODE_CACHE_TTL,
        )
    except Exception as e:
        logger.warning(f"Geocode cache write failed: {e}")


async def search_addresses(
    query: str,
    client: Optional[httpx.AsyncClient] = None,
) -> List[AddressSuggestion]:
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    cached = await _cached(query)
    if cached is not None:
        return cached

    params = {
        "format": "json",
        "q": query,
        "countrycodes": settings.GEOCODE_COUNTRY_CODES,
        "limit": settings.GEOCODE_LIMIT,
    }
    headers = {"User-Agent": settings.GEOCODE_USER_AGENT}
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.GEOCODE_TIMEOUT) as http:
                response = await http.get(settings.GEOCODE_URL, params=params, headers=headers)
        else:
            response = await client.get(settings.GEOCODE_URL, params=params, headers=headers)
        response.raise_for_status()
        suggestions = _parse_candidates(response.json())
    except (httpx.HTTPError, ValueError) as e:
        geocode_lookups.labels(outcome="error").inc()
        logger.warning(f"Address lookup failed for {query!r}: {e}")
        return []

    geocode_lookups.labels(outcome="ok").inc()
    await _store(query, suggestions)
    return suggestions
