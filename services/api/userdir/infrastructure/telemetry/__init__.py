from opentelemetry import trace as otel_trace, metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
import opentelemetry.instrumentation.sqlalchemy as otel_sqla
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
import os
import logging
from userdir.common.config import Config

logger = logging.getLogger('userdir')


def setup_opentelemetry(app) -> bool:
    """Installs OTLP exporters and instruments the app. No-op unless OTEL_ENABLED=1"""
    if Config.OTEL_ENABLED != 1:
        logger.info('[OTEL] Disabled, spans and metrics stay in-process (no-op providers)')
        return False

    resource = Resource.create({
        "service.name": Config.OTEL_SERVICE_NAME,
        "service.version": Config.GIT_COMMIT,
        "process.pid": os.getpid(),
        "service.instance.id": f"worker-{os.getpid()}",
        })

    metric_exporter = OTLPMetricExporter(endpoint=Config.OTEL_GRPC_ENDPOINT, insecure=True)
    span_exporter = OTLPSpanExporter(endpoint=Config.OTEL_GRPC_ENDPOINT, insecure=True)

    reader = PeriodicExportingMetricReader(
        exporter=metric_exporter,
        export_interval_millis=15000
    )

    tracer = TracerProvider(resource=resource)
    meter = MeterProvider(resource=resource, metric_readers=[reader])
    otel_metrics.set_meter_provider(meter)
    otel_trace.set_tracer_provider(tracer)

    tracer.add_span_processor(BatchSpanProcessor(span_exporter))

    FastAPIInstrumentor.instrument_app(app, exclude_spans=['receive', 'send'])
    LoggingInstrumentor().instrument(set_logging_format=False)
    logger.info(f'[OTEL] Exporting to {Config.OTEL_GRPC_ENDPOINT}')
    return True


def instrument_database(engine) -> None:
    if Config.OTEL_ENABLED != 1:
        return
    otel_sqla.SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
