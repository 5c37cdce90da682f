"""Prometheus metrics for mapping lookups and edge recomputation."""

from prometheus_client import Counter, Histogram

route_lookups_total = Counter(
    "route_lookups_total",
    "Total directions lookups",
    ["mode", "outcome"],
)

route_lookup_latency_ms = Histogram(
    "route_lookup_latency_ms",
    "Directions lookup latency in milliseconds",
    ["mode"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

geocode_requests_total = Counter(
    "geocode_requests_total",
    "Total geocoding requests",
    ["outcome"],
)

edge_recomputes_total = Counter(
    "edge_recomputes_total",
    "Total edge recompute attempts",
    ["outcome"],
)


class PrometheusLookupMetrics:
    """Prometheus-based lookup metrics implementation."""

    def record_route(self, mode: str, outcome: str, latency_ms: float) -> None:
        """Record a directions lookup."""
        route_lookups_total.labels(mode=mode, outcome=outcome).inc()
        route_lookup_latency_ms.labels(mode=mode).observe(latency_ms)

    def record_geocode(self, outcome: str) -> None:
        """Record a geocoding request."""
        geocode_requests_total.labels(outcome=outcome).inc()

    def record_edge(self, outcome: str) -> None:
        """Record an edge recompute outcome (updated, skipped, failed)."""
        edge_recomputes_total.labels(outcome=outcome).inc()
