"""Structured JSON logging with trace context."""

import logging
import sys

from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from investigator.config import settings
from investigator.telemetry.tracing import service_resource

_JSON_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s",'
    '"trace_id":"%(otelTraceID)s","span_id":"%(otelSpanID)s",'
    '"service":"%(otelServiceName)s"}'
)

_UVICORN_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s"}'
)


class SafeOtelFormatter(logging.Formatter):
    """Formatter that injects OTEL fields with safe defaults for non-instrumented loggers."""

    def format(self, record: logging.LogRecord) -> str:
        defaults = {
            "otelTraceID": "0",
            "otelSpanID": "0",
            "otelServiceName": settings.service_name,
        }
        for key, default in defaults.items():
            if not hasattr(record, key):
                setattr(record, key, default)
        return super().format(record)


def _otlp_handler(otlp_endpoint: str, level: int) -> logging.Handler:
    log_provider = LoggerProvider(resource=service_resource())
    otlp_exporter = OTLPLogExporter(endpoint=otlp_endpoint, insecure=True)
    log_provider.add_log_record_processor(BatchLogRecordProcessor(otlp_exporter))
    return LoggingHandler(level=level, logger_provider=log_provider)


def setup_logging(otlp_endpoint: str = "", level: int | str = logging.INFO) -> logging.Logger:
    """Configure the ``investigator`` logger tree; OTLP export only when an endpoint is given."""
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(SafeOtelFormatter(_JSON_FORMAT))

    uvicorn_handler = logging.StreamHandler(sys.stdout)
    uvicorn_handler.setFormatter(logging.Formatter(_UVICORN_FORMAT))

    logger = logging.getLogger("investigator")
    logger.setLevel(level)
    logger.handlers = [stream_handler]
    if otlp_endpoint:
        logger.addHandler(_otlp_handler(otlp_endpoint, logger.level))

    logging.getLogger("uvicorn.access").handlers = [uvicorn_handler]
    logging.getLogger("uvicorn.error").handlers = [uvicorn_handler]

    return logger
