"""
Logging setup for the cart service.

The root logger gets one stdout handler at import time. Modules log through
`get_logger(__name__)`; SKUs and other caller-supplied text go through
`sanitize_for_logging` first.

Environment:
    LOG_LEVEL   DEBUG / INFO / WARNING / ERROR (default INFO)
    LOG_FORMAT  "simple" drops the timestamp, for collectors that add their own
"""

import logging
import os
import sys
from functools import cache

_FORMATS = {
    "default": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "simple": "%(levelname)s - %(name)s - %(message)s",
}

# CR/LF would let a crafted SKU forge extra log lines (CWE-117)
_CONTROL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    log_format = _FORMATS.get(os.environ.get("LOG_FORMAT", ""), _FORMATS["default"])

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format))
    root.addHandler(handler)
    root.setLevel(level)

    # Catalog lookups and Upstash calls go through httpx
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass __name__)."""
    return logging.getLogger(name)


def sanitize_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape control characters and truncate; "N/A" for empty values."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_CONTROL_ESCAPES)
    if len(safe_value) > max_length:
        return safe_value[:max_length] + "..."
    return safe_value


__all__ = ["get_logger", "sanitize_for_logging"]
