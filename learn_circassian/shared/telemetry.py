# learn_circassian\shared\telemetry.py
import structlog

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from learn_circassian import __version__
from learn_circassian.shared.config import settings

logger = structlog.get_logger()


def setup_telemetry(app_name: str = settings.OTEL_SERVICE_NAME) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup.

    Returns False (and leaves the no-op global provider in place) when no
    OTLP endpoint is configured, which is the normal desktop situation.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no_otlp_endpoint")
        return False

    logger.info("telemetry_init", service=app_name)

    # 1. Define Resource (Service Identity)
    resource = Resource.create(attributes={
        "service.name": app_name,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    # 2. Configure Tracer Provider
    trace_provider = TracerProvider(resource=resource)

    # 3. Configure Exporter
    otlp_exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # 4. Optional: Console Exporter for local Debugging
    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # 5. Set Global Provider
    trace.set_tracer_provider(trace_provider)
    return True


def instrument_fastapi(app):
    """
    Auto-instruments the FastAPI application to trace incoming requests.
    """
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)


def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in specific modules.
    """
    return trace.get_tracer(name)
