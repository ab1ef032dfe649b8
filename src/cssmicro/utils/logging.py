"""Structured log events carrying a trace id and keyword fields."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

__all__ = ["generate_trace_id", "log_event"]


def generate_trace_id() -> str:
    """Return a unique trace identifier suitable for correlating log events."""

    return uuid4().hex


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
    message: str | None = None,
    **fields: Any,
) -> str:
    """Emit ``event`` on ``logger`` and return the trace id used.

    The event name, trace id and ``fields`` are attached to the record as the
    ``event``, ``trace_id`` and ``extra_fields`` attributes. Nothing is built
    when ``level`` is disabled for ``logger``.
    """

    event_trace_id = trace_id or generate_trace_id()
    if not logger.isEnabledFor(level):
        return event_trace_id

    if message is None:
        details = " ".join(f"{key}={value!r}" for key, value in fields.items())
        message = f"{event} {details}" if details else event
    extra = {
        "trace_id": event_trace_id,
        "event": event,
        "extra_fields": fields,
    }

    logger.log(level, message, extra=extra)
    return event_trace_id
