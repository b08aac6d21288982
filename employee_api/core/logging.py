"""Structured JSON Logging.

Every record is a single JSON object on stdout carrying the request id of
the inbound request that produced it and, while that request is being
served, how many upstream directory calls it has made.
"""

import logging
import sys
from contextvars import ContextVar
from dataclasses import dataclass, field

from pythonjsonlogger import jsonlogger

from ..utils import generate_request_id
from .config import settings

request_id_var: ContextVar[str] = ContextVar('request_id', default='no-request-id')


@dataclass
class UpstreamTrace:
    """Upstream calls made while serving one inbound request.

    The middleware sets one trace per request before handing off, and the
    client appends to that same object, so calls made in the handler task
    are visible to the middleware afterwards.
    """
    operations: list[str] = field(default_factory=list)
    total_duration: float = 0.0

    def add(self, operation: str, outcome: str, duration: float):
        self.operations.append(f"{operation}:{outcome}")
        self.total_duration += duration

    @property
    def call_count(self) -> int:
        return len(self.operations)

    def as_log_fields(self) -> dict:
        return {
            'upstream_calls': self.call_count,
            'upstream_operations': self.operations,
            'upstream_time': self.total_duration
        }


upstream_trace_var: ContextVar[UpstreamTrace | None] = ContextVar('upstream_trace', default=None)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with the request it belongs to.

    Records emitted while a request is in flight also carry the number of
    upstream calls made so far, so a slow or failing request can be matched
    to the upstream traffic behind it without joining on timestamps.
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['request_id'] = request_id_var.get()

        trace = upstream_trace_var.get()
        if trace is not None:
            log_record.setdefault('upstream_calls', trace.call_count)

        log_record['location'] = f"{record.filename}:{record.lineno}:{record.funcName}"
        log_record['process_id'] = record.process


# Loggers whose per-request lines duplicate what RequestIDMiddleware and
# EmployeeClient already emit as structured records
QUIETED_LOGGERS = ('httpx', 'httpcore', 'uvicorn.access')


def setup_logging(level: str | None = None) -> logging.Logger:
    """Route all logging through one JSON handler on stdout.

    Args:
        level: Level name, defaults to settings.LOG_LEVEL

    Returns:
        The configured root logger
    """
    level_value = getattr(logging, level or settings.LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s'))

    root = logging.getLogger()
    root.setLevel(level_value)
    root.handlers = [handler]

    for name in QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    root.info(
        "Logging configured",
        extra={
            'log_level': logging.getLevelName(level_value),
            'environment': settings.ENVIRONMENT,
            'upstream': settings.UPSTREAM_BASE_URL
        }
    )
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request id to the current context, generating one when absent."""
    request_id = request_id or generate_request_id()
    request_id_var.set(request_id)
    return request_id


def get_request_id() -> str:
    return request_id_var.get()


def start_upstream_trace() -> UpstreamTrace:
    """Begin collecting upstream calls for the current request."""
    trace = UpstreamTrace()
    upstream_trace_var.set(trace)
    return trace


def note_upstream_call(operation: str, outcome: str, duration: float):
    """Attach an upstream call to the current request's trace, if any."""
    trace = upstream_trace_var.get()
    if trace is not None:
        trace.add(operation, outcome, duration)
