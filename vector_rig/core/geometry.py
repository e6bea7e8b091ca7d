# -*- coding: utf-8 -*-
"""Geometry helpers.

Two spaces are involved:

- *vector space*: abstract units, y grows upward.
- *device space*: pixels on the host canvas, y grows downward. A scene maps
  between them with an origin (in device pixels) and a uniform scale.
"""

from __future__ import annotations

from typing import Tuple

Vec2 = Tuple[float, float]


def to_vector_space(device_pos: Vec2, origin: Vec2, scale: float) -> Vec2:
    """Device pixels -> vector units (device Y is inverted)."""
    return (
        (float(device_pos[0]) - float(origin[0])) / scale,
        (float(origin[1]) - float(device_pos[1])) / scale,
    )


def to_device(vx: float, vy: float, origin: Vec2, scale: float) -> Vec2:
    """Vector units -> device pixels. Exact inverse of :func:`to_vector_space`."""
    return float(origin[0]) + vx * scale, float(origin[1]) - vy * scale


def dot(ux: float, uy: float, vx: float, vy: float) -> float:
    return ux * vx + uy * vy


def cross(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed area of the parallelogram spanned by u and v."""
    return ux * vy - uy * vx


def is_zero_vector(v: Vec2) -> bool:
    return float(v[0]) == 0.0 and float(v[1]) == 0.0


def project(point: Vec2, direction: Vec2) -> float:
    """Scalar k such that k * direction is the orthogonal projection of point.

    ``direction`` must be non-zero; scenes validate that once when built.
    """
    dx, dy = float(direction[0]), float(direction[1])
    return dot(float(point[0]), float(point[1]), dx, dy) / dot(dx, dy, dx, dy)


def position_for(k: float, direction: Vec2) -> Vec2:
    return k * float(direction[0]), k * float(direction[1])


def direction_from_equation(p: float, q: float) -> Vec2:
    """Direction of the line p*x + q*y = 0 through the origin.

    Returned as (q, -p), flipped so x >= 0 (or y > 0 for a vertical line).
    2x - 3y = 0 gives (3, 2).
    """
    dx, dy = float(q), -float(p)
    if dx < 0.0 or (dx == 0.0 and dy < 0.0):
        dx, dy = -dx, -dy
    return dx, dy


def equation_from_point(x: float, y: float) -> Vec2:
    """Coefficients (p, q) of p*x + q*y = 0 through the origin and (x, y)."""
    return float(y), -float(x)
