"""
OpenTelemetry tracing.

Board renders and queue mutations run inside spans so their trace ids
reach the logs. Spans leave the process only when TRACING_ENABLED is set.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer
from sqlalchemy.engine import Engine, make_url

from workqueue import __version__
from workqueue.config import Settings, get_settings

logger = logging.getLogger(__name__)

_tracer: Tracer | None = None


def _resource(settings: Settings) -> Resource:
    return Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": __version__,
            "db.system": make_url(settings.database_url).get_backend_name(),
            "workqueue.display_locale": settings.display_locale,
        }
    )


def setup_tracing(settings: Settings | None = None) -> Tracer:
    """
    Install the global tracer provider.

    Args:
        settings: Settings to read the exporter config from. Defaults to
            the cached application settings.

    Returns:
        The tracer used for queue spans.
    """
    global _tracer

    settings = settings or get_settings()
    provider = TracerProvider(resource=_resource(settings))

    if settings.tracing_enabled:
        exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info(
            "Exporting queue spans",
            extra={"endpoint": settings.otel_exporter_otlp_endpoint},
        )

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer("workqueue", __version__)
    return _tracer


def instrument_fastapi(app: FastAPI) -> None:
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy(engine: Engine) -> None:
    """Trace statements on the sync engine behind the async one."""
    SQLAlchemyInstrumentor().instrument(engine=engine)


def get_tracer() -> Tracer:
    """Get the queue tracer, installing the provider on first use."""
    if _tracer is None:
        return setup_tracing()
    return _tracer
