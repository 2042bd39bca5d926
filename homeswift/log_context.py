"""Request-scoped logging helpers."""

import logging
import uuid

REQUEST_ID_HEADER = "X-Request-ID"

request_logger = logging.getLogger("homeswift.request")


class RequestIdFilter(logging.Filter):
    """Make ``request_id`` available to formatters for every record."""

    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


class RequestLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def new_request_id():
    return uuid.uuid4().hex[:16]


def get_request_logger(request_id, logger=None):
    """Wrap ``logger`` so every record carries ``request_id``."""
    return RequestLoggerAdapter(logger or request_logger, {"request_id": request_id})


def logger_for(request, fallback):
    """Return the logger attached to ``request`` by the middleware, or ``fallback``."""
    return getattr(request, "logger", None) or fallback


def bind(logger, log=None):
    """
    Re-bind the request context carried by ``log`` onto ``logger``.

    Services receive the request's logger and keep logging under their own
    module name; without a request logger they log through ``logger`` as is.
    """
    if isinstance(log, logging.LoggerAdapter):
        return RequestLoggerAdapter(logger, dict(log.extra or {}))
    return logger
