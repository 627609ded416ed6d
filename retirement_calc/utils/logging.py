from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

# Per-request id for the HTTP surface; "-" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class SimpleStructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        msg = record.getMessage()
        line = (
            f"{ts} level={record.levelname} logger={record.name} "
            f"request_id={getattr(record, 'request_id', '-')} msg={msg}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers (avoid duplicate logs when the app factory runs twice)
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(SimpleStructuredFormatter())

    root.addHandler(handler)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
