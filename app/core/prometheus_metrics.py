from prometheus_client import Counter, Histogram, Info, generate_latest
from prometheus_client.core import CollectorRegistry

# Prometheus Registry
REGISTRY = CollectorRegistry()

service_requests_total = Counter(
    'auto_service_requests_total',
    'Total service method calls',
    ['status', 'service', 'method'],
    registry=REGISTRY
)

service_duration_seconds = Histogram(
    'auto_service_duration_seconds',
    'Service method duration in seconds',
    ['service', 'method'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
    registry=REGISTRY
)

rate_limit_exceeded_total = Counter(
    'auto_rate_limit_exceeded_total',
    'Total rate limit violations',
    ['endpoint'],
    registry=REGISTRY
)

system_info = Info(
    'auto_service_info',
    'System information',
    registry=REGISTRY
)


class PrometheusMetricsCollector:
    """Collects service call metrics into the Prometheus registry"""

    def __init__(self):
        system_info.info({
            'version': '1.0.0',
            'service': 'auto-service'
        })

    def record_service_call(
        self,
        service_name: str,
        method_name: str,
        duration_seconds: float,
        status: str,
    ):
        """Record one service call. status is 'success', 'rejected' or 'error'."""
        service_requests_total.labels(
            status=status,
            service=service_name,
            method=method_name
        ).inc()

        service_duration_seconds.labels(
            service=service_name,
            method=method_name
        ).observe(duration_seconds)

    def record_rate_limit_exceeded(self, endpoint: str):
        rate_limit_exceeded_total.labels(endpoint=endpoint).inc()

    def get_prometheus_metrics(self) -> bytes:
        """Get Prometheus metrics in text format"""
        return generate_latest(REGISTRY)

# Global instance
prometheus_collector = PrometheusMetricsCollector()
