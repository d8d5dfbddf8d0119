"""
Metrics Collection
Prometheus counters for the editor core
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects Prometheus metrics for one editor process.

    Takes its own registry so several collectors (tests, multiple
    documents) can coexist.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        # Acceleration dispatch
        self.accel_calls_total = Counter(
            "pagecraft_accel_calls_total",
            "Accelerated capability calls by the path that answered",
            ["capability", "path"],
            registry=self.registry,
        )
        self.accel_fallbacks_total = Counter(
            "pagecraft_accel_fallbacks_total",
            "Native failures recovered by the interpreted implementation",
            ["capability", "reason"],
            registry=self.registry,
        )
        self.accel_duration = Histogram(
            "pagecraft_accel_duration_seconds",
            "Accelerated capability duration in seconds",
            ["capability"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )

        # Editing
        self.mutations_total = Counter(
            "pagecraft_mutations_total",
            "Tree mutations committed to history",
            ["operation"],
            registry=self.registry,
        )
        self.history_moves_total = Counter(
            "pagecraft_history_moves_total",
            "Undo/redo steps taken",
            ["direction"],
            registry=self.registry,
        )
        self.components = Gauge(
            "pagecraft_components",
            "Components in the current snapshot",
            registry=self.registry,
        )

        # Documents
        self.documents_total = Counter(
            "pagecraft_documents_total",
            "Document imports/exports",
            ["direction", "status"],
            registry=self.registry,
        )
        self.errors_total = Counter(
            "pagecraft_errors_total",
            "Errors by type and package",
            ["error_type", "component"],
            registry=self.registry,
        )

    def record_accel_call(self, capability: str, path: str, duration: float) -> None:
        """Record which path (native/fallback) answered a capability."""
        self.accel_calls_total.labels(capability=capability, path=path).inc()
        self.accel_duration.labels(capability=capability).observe(duration)

    def record_fallback(self, capability: str, reason: str) -> None:
        """Record a recovered native failure."""
        self.accel_fallbacks_total.labels(capability=capability, reason=reason).inc()

    def record_mutation(self, operation: str, component_count: int) -> None:
        """Record a committed tree mutation."""
        self.mutations_total.labels(operation=operation).inc()
        self.components.set(component_count)

    def record_history_move(self, direction: str, component_count: int) -> None:
        """Record an undo or redo."""
        self.history_moves_total.labels(direction=direction).inc()
        self.components.set(component_count)

    def record_document(self, direction: str, status: str) -> None:
        """Record an import or export attempt."""
        self.documents_total.labels(direction=direction, status=status).inc()

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def sample(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Read a sample value back (0.0 if never observed)."""
        value = self.registry.get_sample_value(name, labels or {})
        return value if value is not None else 0.0

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)
