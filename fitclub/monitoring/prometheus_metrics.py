# fitclub/monitoring/prometheus_metrics.py
"""
Prometheus metrics module for FitClub.

Service timings come from the @measure_operation decorator; admission and
lock counters are recorded by the scheduling services.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "fitclub_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "fitclub_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "fitclub_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

admissions_total = Counter(
    "fitclub_admissions_total",
    "Scheduling proposals by kind and outcome",
    ["kind", "outcome", "reason"],  # outcome: accepted | rejected
    registry=REGISTRY,
)

scheduling_lock_total = Counter(
    "fitclub_scheduling_lock_total",
    "Conflict-domain lock events",
    ["action", "outcome"],  # acquire/release x success/timeout/error
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Facade over the module-level collectors."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'CapacityGuard')
            operation: Operation/method name (e.g., 'propose_registration')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_admission(kind: str, outcome: str, reason: str = "") -> None:
        admissions_total.labels(kind=kind, outcome=outcome, reason=reason).inc()

    @staticmethod
    def record_scheduling_lock(action: str, outcome: str) -> None:
        scheduling_lock_total.labels(action=action, outcome=outcome).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Render the registry in Prometheus exposition format."""
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
