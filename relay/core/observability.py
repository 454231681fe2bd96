from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Counter, Histogram, start_http_server
import structlog

from relay.core.config import settings

logger = structlog.get_logger(__name__)

# Prometheus metrics
RELAY_REQUESTS = Counter(
    "relay_requests_total", "Relayed blueprint requests by outcome", ["outcome"]
)

UPSTREAM_REQUEST_DURATION = Histogram(
    "upstream_request_duration_seconds",
    "Upstream generateContent duration in seconds",
    ["model"],
)

UPSTREAM_RESPONSES = Counter(
    "upstream_responses_total", "Upstream responses by status code", ["status_code"]
)


def setup_observability() -> None:
    """Setup OpenTelemetry and Prometheus metrics."""

    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": settings.version,
            "service.environment": settings.environment,
        }
    )

    provider = TracerProvider(resource=resource)

    # Setup OTLP exporter if endpoint is configured
    if settings.otel_exporter_otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(
            endpoint=settings.otel_exporter_otlp_endpoint,
            insecure=not settings.is_production(),
        )
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)

    if settings.prometheus_metrics_enabled and not settings.is_testing():
        try:
            start_http_server(settings.prometheus_metrics_port)
            logger.info(
                "Prometheus metrics server started",
                port=settings.prometheus_metrics_port,
            )
        except OSError as e:
            logger.error("Failed to start Prometheus metrics server", error=str(e))


def get_tracer() -> trace.Tracer:
    """Get OpenTelemetry tracer."""
    return trace.get_tracer(__name__)


@asynccontextmanager
async def trace_async_operation(
    operation_name: str, **attributes: Any
) -> AsyncGenerator[trace.Span, None]:
    """Context manager for tracing async operations."""
    tracer = get_tracer()
    with tracer.start_as_current_span(operation_name) as span:
        for key, value in attributes.items():
            span.set_attribute(key, str(value))
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            raise


class MetricsCollector:
    """Helper class for collecting relay metrics."""

    @staticmethod
    def record_outcome(outcome: str) -> None:
        RELAY_REQUESTS.labels(outcome=outcome).inc()

    @staticmethod
    def record_upstream_call(model: str, status_code: int, duration: float) -> None:
        """Record one upstream round trip."""
        UPSTREAM_RESPONSES.labels(status_code=str(status_code)).inc()
        UPSTREAM_REQUEST_DURATION.labels(model=model).observe(duration)


# Global metrics collector instance
metrics = MetricsCollector()
