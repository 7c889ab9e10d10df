"""Prometheus metrics for the chat engines.

All metrics use the ``ragchat_`` prefix and a ``engine`` label carrying
the engine's ``chat_engine_name``.  Exposing them (``/metrics`` or a push
gateway) is the host process's job.
"""

import asyncio
import functools
import logging
import time
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# ---------------------------------------------------------------------------
# Turn metrics
# ---------------------------------------------------------------------------

CHAT_TURNS_ACTIVE = Gauge(
    "ragchat_chat_turns_active",
    "Number of chat turns currently awaiting a gateway",
    ["engine"],
)

CHAT_TURNS_TOTAL = Counter(
    "ragchat_chat_turns_total",
    "Total number of chat turns, by outcome",
    ["engine", "status"],  # "ok" | "error" | "cancelled"
)

CHAT_TURN_DURATION_SECONDS = Histogram(
    "ragchat_chat_turn_duration_seconds",
    "End-to-end duration of a chat turn",
    ["engine"],
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60, 120),
)

# ---------------------------------------------------------------------------
# Retrieval / condensation metrics
# ---------------------------------------------------------------------------

RETRIEVED_NODES = Histogram(
    "ragchat_retrieved_nodes",
    "Number of nodes returned by the retriever per turn",
    ["engine"],
    buckets=(0, 1, 2, 3, 5, 8, 13, 21),
)

CONDENSE_TOTAL = Counter(
    "ragchat_condense_total",
    "Question condensation outcomes",
    ["result"],  # "predicted" | "passthrough"
)


def observe_turn(
    engine: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator for ``achat`` that records turn metrics.

    Tracks the in-flight gauge, outcome counter (ok / error / cancelled)
    and duration histogram, all labelled with *engine*.  Exceptions are
    re-raised untouched.
    """

    def decorator(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            CHAT_TURNS_ACTIVE.labels(engine=engine).inc()
            start = time.monotonic()
            status = "ok"
            try:
                return await fn(*args, **kwargs)
            except asyncio.CancelledError:
                status = "cancelled"
                raise
            except Exception:
                status = "error"
                raise
            finally:
                CHAT_TURNS_ACTIVE.labels(engine=engine).dec()
                CHAT_TURNS_TOTAL.labels(engine=engine, status=status).inc()
                CHAT_TURN_DURATION_SECONDS.labels(engine=engine).observe(
                    time.monotonic() - start
                )

        return wrapper

    return decorator
