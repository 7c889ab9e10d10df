"""OpenTelemetry bootstrap -- tracing initialisation and span constants.

Configures a ``TracerProvider`` with an OTLP HTTP exporter when tracing is
enabled via ``TracingConfig``.  When disabled the module-level ``tracer``
is the API's no-op tracer, so engines can open spans unconditionally.

Usage::

    from ragchat.infra.telemetry import SPAN_CHAT_TURN, tracer

    with tracer.start_as_current_span(SPAN_CHAT_TURN) as span:
        ...
"""

from __future__ import annotations

import logging

from opentelemetry import trace

from ragchat.configs.system import TracingConfig

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("ragchat")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHAT_TURN = "chat.turn"
SPAN_CHAT_CONDENSE = "chat.condense"
SPAN_CHAT_RETRIEVE = "chat.retrieve"
SPAN_CHAT_COMPLETE = "chat.complete"
SPAN_QUERY_ENGINE = "query_engine.query"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_CHAT_ENGINE = "chat.engine"
ATTR_CHAT_EVENT_ID = "chat.event_id"
ATTR_CHAT_MESSAGE_LEN = "chat.message_len"
ATTR_CHAT_HISTORY_LEN = "chat.history_len"
ATTR_CHAT_REQUEST_LEN = "chat.request_len"
ATTR_CONDENSE_PASSTHROUGH = "condense.passthrough"
ATTR_RETRIEVE_RESULT_COUNT = "retrieve.result_count"


def init_telemetry(settings: TracingConfig | None = None) -> bool:
    """Initialise the OTEL ``TracerProvider``.

    Returns ``True`` when a provider was installed.  When ``settings`` is
    ``None``, tracing is disabled, or no endpoint is configured, this is a
    no-op and spans stay non-recording.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return False

    if not settings.endpoint:
        logger.warning(
            "Tracing enabled but no endpoint configured, "
            "skipping OpenTelemetry setup."
        )
        return False

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})
    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
    )
    trace.set_tracer_provider(provider)

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )
    return True

