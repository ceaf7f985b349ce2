"""Logging setup for Product Pulse.

All modules log under the ``product_pulse`` hierarchy. Upstream failures are
logged in full here and never returned to HTTP callers, so the handler
installed by :func:`configure_logging` masks credentials before anything is
written.
"""

import logging
import re

_root_logger = logging.getLogger("product_pulse")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_SENSITIVE_PATTERNS = [
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-\.]{8,}", re.IGNORECASE), r"\1 [REDACTED]"),
    (re.compile(r"\b(gh[pousr]_|github_pat_)[A-Za-z0-9_]{8,}"), "[REDACTED]"),
    (re.compile(r"(token|authorization)(['\"]?\s*[:=]\s*['\"]?)[^'\",\s]+", re.IGNORECASE), r"\1\2[REDACTED]"),
]


def mask_sensitive_data(text: str) -> str:
    """Replace GitHub tokens and Authorization values with placeholders."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Mask credentials in the fully formatted message of each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_sensitive_data(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def configure_logging(
    level: int | str = logging.INFO,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """Attach a masking handler to the ``product_pulse`` logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    handler.addFilter(SensitiveDataFilter())

    for existing in list(_root_logger.handlers):
        _root_logger.removeHandler(existing)
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``product_pulse`` or ``product_pulse.<name>``."""
    if name is None:
        return _root_logger
    return logging.getLogger(f"product_pulse.{name}")
