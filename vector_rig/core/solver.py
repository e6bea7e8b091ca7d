# -*- coding: utf-8 -*-
"""Closed-form constraint primitives used by the engine.

This keeps the math side independent from Qt UI code.
"""

from __future__ import annotations

import math
from typing import Tuple

from .errors import ConfigurationError, DegenerateSystemError
from .geometry import Vec2, cross, is_zero_vector, position_for, project


class ConstraintSolver:
    @staticmethod
    def residual(b: Vec2, k: float, a: Vec2) -> Vec2:
        """b - k * a"""
        return float(b[0]) - k * float(a[0]), float(b[1]) - k * float(a[1])

    @staticmethod
    def solve_pair(a: Vec2, c: Vec2, r: Vec2, eps: float = 1e-9) -> Tuple[float, float]:
        """Solve k_a * a + k_c * c = r by Cramer's rule.

        The determinant is compared against ``eps * |a| * |c|``, i.e. the sine
        of the angle between a and c, so the threshold does not depend on the
        length of the vectors. Raises DegenerateSystemError when a and c are
        (numerically) parallel.
        """
        ax, ay = float(a[0]), float(a[1])
        cx, cy = float(c[0]), float(c[1])
        rx, ry = float(r[0]), float(r[1])

        det = cross(ax, ay, cx, cy)
        bound = eps * math.hypot(ax, ay) * math.hypot(cx, cy)
        if not abs(det) > bound:
            raise DegenerateSystemError(
                f"direction vectors ({ax:g}, {ay:g}) and ({cx:g}, {cy:g}) are parallel",
                det=det,
            )
        k_a = (rx * cy - ry * cx) / det
        k_c = (ax * ry - ay * rx) / det
        return k_a, k_c

    @staticmethod
    def solve_point_on_line(direction: Vec2, point: Vec2) -> Tuple[float, Vec2, Vec2]:
        """Snap ``point`` onto the line through the origin along ``direction``.

        Returns (k, constrained, foot) in vector space, where ``foot`` is the
        drop from the constrained point to the x axis.
        """
        if is_zero_vector(direction):
            raise ConfigurationError("Line direction must be non-zero")
        k = project(point, direction)
        cx, cy = position_for(k, direction)
        return k, (cx, cy), (cx, 0.0)
