"""
Prometheus metrics collection for the Klevu SDK

Counters and histograms describing record validation and API calls.
Metrics are recorded on a private registry so that embedding applications
can expose them alongside their own.
"""
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

records_validated_total = Counter(
    name="klevu_records_validated_total",
    documentation="Total number of records validated before sending",
    labelnames=["record_type", "status"],  # status: valid, invalid
    registry=REGISTRY,
)

# =======================
# API METRICS
# =======================

api_requests_total = Counter(
    name="klevu_api_requests_total",
    documentation="Total number of requests sent to Klevu APIs",
    labelnames=["service", "method", "status_code"],
    registry=REGISTRY,
)

api_request_duration_seconds = Histogram(
    name="klevu_api_request_duration_seconds",
    documentation="Time spent waiting for Klevu API responses in seconds",
    labelnames=["service", "method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

api_errors_total = Counter(
    name="klevu_api_errors_total",
    documentation="Total number of failed API calls by exception type",
    labelnames=["service", "error_type"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(api_request_duration_seconds, service="batch", method="PUT"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    histogram.labels(**labels).observe(value)


# =======================
# SDK-SPECIFIC HELPERS
# =======================

def record_validation_results(record_type: str, valid_records: int, invalid_records: int) -> None:
    """
    Record the outcome of validating one batch

    Args:
        record_type: "record" or "update"
        valid_records: Number of records that passed validation
        invalid_records: Number of records that failed validation
    """
    if valid_records:
        increment_counter(records_validated_total, valid_records, record_type=record_type, status="valid")
    if invalid_records:
        increment_counter(records_validated_total, invalid_records, record_type=record_type, status="invalid")


def record_api_request(service: str, method: str, status_code: int, duration_seconds: float) -> None:
    """Record one completed request/response exchange."""
    increment_counter(api_requests_total, service=service, method=method, status_code=str(status_code))
    observe_histogram(api_request_duration_seconds, duration_seconds, service=service, method=method)


def record_api_error(service: str, error: Exception) -> None:
    increment_counter(api_errors_total, service=service, error_type=type(error).__name__)
