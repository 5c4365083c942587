"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache'],
    registry=registry
)

rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total',
    'Total rate limit exceeded events',
    registry=registry
)

quotes_submitted = Counter(
    'quotes_submitted_total',
    'Quote requests submitted through the public form',
    ['saved'],
    registry=registry
)

quote_total_dollars = Histogram(
    'quote_total_dollars',
    'Computed quote totals in dollars',
    buckets=(995, 1100, 1300, 1500, 1800, 2200, 3000, 5000),
    registry=registry
)

geocode_lookups = Counter(
    'geocode_lookups_total',
    'Address geocoding lookups',
    ['outcome'],
    registry=registry
)

history_entries_created = Counter(
    'quote_history_entries_total',
    'Quote history entries written',
    ['change_type'],
    registry=registry
)

price_drift_detected = Counter(
    'quote_price_drift_total',
    'Admin price checks where the stored amount differs from the computed one',
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)

db_connected = Gauge(
    'db_connected',
    'Database connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
