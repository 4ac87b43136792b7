"""Structured JSON logging with secret masking and request correlation.

Every record is emitted as one JSON object per line. API keys for the insight
LLM endpoint and bearer tokens are masked before they reach any handler.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import uuid
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any

_request_id: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(value: str | None = None) -> str:
    """Set current request_id (or generate new). Returns active id."""
    rid = value or str(uuid.uuid4())
    _request_id.set(rid)
    return rid


def get_request_id() -> str:
    """Get current request_id for contextual logging."""
    return _request_id.get()


_PATTERNS = [
    # OpenAI-style keys: sk-...
    (re.compile(r"\bsk-[A-Za-z0-9_-]{8,}\b"), "sk-***"),
    (re.compile(r"(?i)\bBearer\s+[A-Za-z0-9._-]{10,}\b"), "Bearer ***"),
    # Long opaque hex keys (aimlapi and friends)
    (re.compile(r"\b[A-Fa-f0-9]{32,}\b"), "***"),
]

_SENSITIVE_KEYS = frozenset(
    {"authorization", "api_key", "api-key", "apikey", "x-api-key", "insight_api_key", "password", "secret", "token"}
)

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

# Third-party loggers that chat at INFO on every insight call
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def _mask_value(v: Any) -> Any:
    """Recursively mask sensitive data in any structure."""
    if v is None or isinstance(v, (int, float, bool)):
        return v
    if is_dataclass(v) and not isinstance(v, type):
        v = asdict(v)
    if isinstance(v, Mapping):
        return {k: "***" if str(k).lower() in _SENSITIVE_KEYS else _mask_value(val) for k, val in v.items()}
    if isinstance(v, (list, tuple, set)):
        return type(v)(_mask_value(i) for i in v)

    s = str(v)
    for rx, repl in _PATTERNS:
        s = rx.sub(repl, s)
    return s


class JsonFormatter(logging.Formatter):
    """JSON log formatter with automatic secret masking."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": _mask_value(record.getMessage()),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
            "request_id": get_request_id() or None,
        }

        extras = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extras:
            payload["extra"] = _mask_value(extras)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def _file_handler(file_path: str, max_bytes: int, backup_count: int) -> logging.Handler:
    log_dir = os.path.dirname(file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return RotatingFileHandler(file_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")


def setup_logging(
    level: str | int = "INFO",
    to_stdout: bool = True,
    file_path: str | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Route every logger through the JSON formatter.

    Args:
        level: Root log level name or number
        to_stdout: Log to stdout (container / systemd friendly)
        file_path: Rotating JSON log file (None to disable file logging)
        max_bytes: Max log file size before rotation (default: 5MB)
        backup_count: Number of rotated files to keep

    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handlers: list[logging.Handler] = []
    if to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))
    if file_path:
        handlers.append(_file_handler(file_path, max_bytes, backup_count))

    fmt = JsonFormatter()
    for handler in handlers:
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance by name."""
    return logging.getLogger(name)


__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
    "JsonFormatter",
]
