# -*- coding: utf-8 -*-
"""Qt event safety helpers.

An uncaught exception inside a Qt event handler can terminate the app.
This decorator logs the traceback and keeps the app alive.
"""

from __future__ import annotations

import functools
from typing import Callable, TypeVar, Any

from .logger import logger

T = TypeVar("T")


def safe_event(fn: Callable[..., T]) -> Callable[..., T | None]:
    """Decorator for Qt event handlers."""

    @functools.wraps(fn)
    def wrapper(self: Any, e: Any) -> T | None:
        try:
            return fn(self, e)
        except Exception:
            logger.exception("Unhandled error in %s", fn.__name__)
            e.ignore()
            return None

    return wrapper
