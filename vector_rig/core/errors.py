# -*- coding: utf-8 -*-
"""Error types raised by the rig engine."""

from __future__ import annotations

from typing import Optional, Tuple


class ConfigurationError(ValueError):
    """A scene cannot be built (zero direction, bad scale, bad expression...)."""


class DegenerateSystemError(ArithmeticError):
    """The two derived direction vectors are parallel, so the 2x2 solve is singular.

    ``pair`` holds the slot indices of the derived vectors when known.
    """

    def __init__(self, message: str, det: float = 0.0, pair: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.det = float(det)
        self.pair = pair
