"""Logging bootstrap for the ``ragchat`` logger namespace.

Only the ``ragchat`` logger is configured; the host's root logger and its
handlers are left alone.  Records stop at ``ragchat`` (``propagate`` is
off) so a host that also logs to stdout does not print them twice.

Two output shapes:

* **JSON lines** (``json_output=True``, default) via python-json-logger.
* **Plain text** (``json_output=False``) for local development.

Each record carries the OpenTelemetry ``trace_id`` / ``span_id`` of the
chat turn that emitted it, or empty strings outside a span.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id
from pythonjsonlogger.json import JsonFormatter

from ragchat.configs.system import LoggingConfig

LIBRARY_LOGGER = "ragchat"

_DEV_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s trace=%(trace_id)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"


class _SpanContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = trace.get_current_span().get_span_context()
        valid = ctx is not None and ctx.is_valid
        record.trace_id = format_trace_id(ctx.trace_id) if valid else ""
        record.span_id = format_span_id(ctx.span_id) if valid else ""
        return True


def _formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter(
            fmt=_JSON_FORMAT,
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
        )
    return logging.Formatter(fmt=_DEV_FORMAT)


def setup_logging(
    config: LoggingConfig | None = None, stream: TextIO | None = None
) -> logging.Logger:
    """Attach one handler to the ``ragchat`` logger and return it.

    Calling it again replaces the handler rather than adding a second one.
    """
    config = config or LoggingConfig()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(_SpanContextFilter())
    handler.setFormatter(_formatter(config.json_output))

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(config.level.upper())
    logger.handlers = [handler]
    logger.propagate = False
    return logger
