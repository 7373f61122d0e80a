"""Logging setup and request correlation ids."""

import logging
import time
import uuid
from typing import TextIO

from user_management.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"
NO_REQUEST_ID = "-"

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_MAX_LEN = 128


class RequestIdFilter(logging.Filter):
    """Give every record a request_id so LOG_FORMAT can always render it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = NO_REQUEST_ID
        return True


def build_handler(stream: TextIO | None = None) -> logging.Handler:
    """Stream handler with UTC timestamps and the request id on every line."""
    handler = logging.StreamHandler(stream)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    return handler


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    logging.basicConfig(level=settings.LOG_LEVEL, handlers=[build_handler()])
    logging.getLogger().setLevel(settings.LOG_LEVEL)


def new_request_id() -> str:
    return uuid.uuid4().hex


def resolve_request_id(inbound: str | None) -> str:
    """Reuse a caller-supplied request id when it is sane, otherwise mint one."""
    if inbound:
        candidate = inbound.strip()
        if candidate and len(candidate) <= REQUEST_ID_MAX_LEN and candidate.isprintable():
            return candidate
    return new_request_id()
