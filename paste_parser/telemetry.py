"""OpenTelemetry setup for the paste parser.

Span tree of one request::

    parser.handle_parse
      parser.parse
        parser.extract_fields
        parser.normalize
        parser.detect_truncation
        parser.resolve_network
      parser.apply_form        (only when the paste is applied)
"""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from paste_parser.config import config

logger = logging.getLogger(__name__)

SERVICE_NAME = "paste-parser"

_provider: TracerProvider | None = None


def _configured_exporter() -> SpanExporter | None:
    if config.otel_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError:
            logger.warning("OTLP endpoint set but the otlp extra is not installed, exporting to console")
            return ConsoleSpanExporter()
        logger.info("Exporting spans to %s", config.otel_endpoint)
        return OTLPSpanExporter(endpoint=config.otel_endpoint)

    # Spans stay in-process unless DEBUG asks to see them
    if config.log_level.upper() == "DEBUG":
        return ConsoleSpanExporter()
    return None


def init_telemetry() -> trace.Tracer:
    """Install the paste-parser tracer provider once per process."""
    global _provider
    if _provider is None:
        _provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
        exporter = _configured_exporter()
        if exporter is not None:
            _provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(_provider)
        set_global_textmap(TraceContextTextMapPropagator())
    return trace.get_tracer(SERVICE_NAME)


def add_span_exporter(exporter: SpanExporter) -> None:
    """Send finished spans to *exporter* as well, synchronously."""
    init_telemetry()
    _provider.add_span_processor(SimpleSpanProcessor(exporter))


def get_tracer() -> trace.Tracer:
    return init_telemetry()
