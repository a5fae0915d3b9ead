"""Logging helpers shared by the copy engine.

The package logger is silent by default (NullHandler); applications attach
their own handlers. Structured fields travel in ``extra={"context": ...}`` so
formatters can render them without parsing messages.

Usage:
    import logging
    from objectfactory.observability import get_logger

    get_logger().addHandler(logging.StreamHandler())
    get_logger().setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

_LOGGER: Final[logging.Logger] = logging.getLogger("objectfactory")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""
    return _LOGGER


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug entry."""
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info entry."""
    _emit(logging.INFO, message, fields)


def type_name(value: Any) -> str:
    """Readable name for a class or type hint, used in log fields."""
    return getattr(value, "__qualname__", None) or repr(value)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    if _LOGGER.isEnabledFor(level):
        _LOGGER.log(level, message, extra={"context": dict(fields)})
