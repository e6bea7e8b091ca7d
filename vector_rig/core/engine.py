# -*- coding: utf-8 -*-
"""Reactive evaluation of the three-weight linear combination rig.

Three control points live on fixed directions a1, a2, a3 through the origin.
Their weights always satisfy::

    k1 * a1 + k2 * a2 + k3 * a3 = b

Exactly one slot is *active* (the one the user drags). Each evaluation reads
the active handle position, projects it to the active weight, and derives the
two other weights with a closed-form 2x2 solve. Nothing is kept between
calls: the engine holds only its immutable configuration, so evaluations may
be interleaved or run from several threads.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from .errors import ConfigurationError, DegenerateSystemError
from .geometry import Vec2, is_zero_vector, position_for, project, to_device, to_vector_space
from .scene import SceneConfig
from .solver import ConstraintSolver
from ..utils.logger import logger


class ActiveIndex(IntEnum):
    A1 = 1
    A2 = 2
    A3 = 3

    @classmethod
    def coerce(cls, value: Any) -> "ActiveIndex":
        # bools are Integral too
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise ValueError(f"Active index must be 1, 2 or 3, got {value!r}")


def _vec2(value: Any, what: str) -> Vec2:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 2:
        raise ConfigurationError(f"{what} must have exactly two components, got {value!r}")
    try:
        x, y = float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be numeric, got {value!r}") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ConfigurationError(f"{what} must be finite, got {value!r}")
    return x, y


def _check_scale(scale: Any) -> float:
    try:
        s = float(scale)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Scale must be a number, got {scale!r}") from None
    if not math.isfinite(s) or s == 0:
        raise ConfigurationError(f"Scale must be finite and non-zero, got {scale!r}")
    return s


def _others(active: ActiveIndex) -> Tuple[int, int]:
    j, k = (i for i in (1, 2, 3) if i != int(active))
    return j, k


@dataclass(frozen=True)
class EvaluationResult:
    active: ActiveIndex
    weights: Tuple[float, float, float]
    positions: Tuple[Vec2, Vec2, Vec2]
    directions: Tuple[Vec2, Vec2, Vec2]

    @property
    def k1(self) -> float:
        return self.weights[0]

    @property
    def k2(self) -> float:
        return self.weights[1]

    @property
    def k3(self) -> float:
        return self.weights[2]

    @property
    def pos1(self) -> Vec2:
        return self.positions[0]

    @property
    def pos2(self) -> Vec2:
        return self.positions[1]

    @property
    def pos3(self) -> Vec2:
        return self.positions[2]

    def weight(self, slot: int) -> float:
        return self.weights[int(slot) - 1]

    def position(self, slot: int) -> Vec2:
        return self.positions[int(slot) - 1]

    def combination(self) -> Vec2:
        """k1*a1 + k2*a2 + k3*a3 in vector space."""
        x = sum(k * d[0] for k, d in zip(self.weights, self.directions))
        y = sum(k * d[1] for k, d in zip(self.weights, self.directions))
        return x, y

    def as_dict(self) -> Dict[str, Any]:
        return {
            "active": int(self.active),
            "k1": self.k1,
            "k2": self.k2,
            "k3": self.k3,
            "pos1": self.pos1,
            "pos2": self.pos2,
            "pos3": self.pos3,
        }


@dataclass(frozen=True)
class LineConstraintResult:
    k: float
    constrained_pos: Vec2
    foot_pos: Vec2

    def as_dict(self) -> Dict[str, Any]:
        return {"k": self.k, "constrained_pos": self.constrained_pos, "foot_pos": self.foot_pos}


class LinearCombinationEngine:
    """Stateless evaluator for one configured rig."""

    def __init__(
        self,
        a1: Vec2,
        a2: Vec2,
        a3: Vec2,
        b: Vec2,
        origin: Vec2 = (0.0, 0.0),
        scale: float = 1.0,
        epsilon: float = 1e-9,
    ):
        directions = tuple(_vec2(a, f"Direction a{idx}") for idx, a in enumerate((a1, a2, a3), start=1))
        for idx, d in enumerate(directions, start=1):
            if is_zero_vector(d):
                raise ConfigurationError(f"Direction a{idx} is the zero vector")
        if not epsilon > 0:
            raise ConfigurationError(f"Epsilon must be positive, got {epsilon!r}")
        self.directions: Tuple[Vec2, Vec2, Vec2] = directions  # type: ignore[assignment]
        self.target: Vec2 = _vec2(b, "Target b")
        self.origin: Vec2 = _vec2(origin, "Origin")
        self.scale = _check_scale(scale)
        self.epsilon = float(epsilon)

    @classmethod
    def configure(cls, a1: Vec2, a2: Vec2, a3: Vec2, b: Vec2, **kwargs: Any) -> "LinearCombinationEngine":
        return cls(a1, a2, a3, b, **kwargs)

    @classmethod
    def from_scene(cls, scene: SceneConfig) -> "LinearCombinationEngine":
        scene.validate()
        a1, a2, a3 = scene.directions
        return cls(a1, a2, a3, scene.target, origin=scene.origin, scale=scene.scale, epsilon=scene.epsilon)

    def direction(self, slot: int) -> Vec2:
        return self.directions[int(slot) - 1]

    def _mapping(self, origin: Optional[Vec2], scale: Optional[float]) -> Tuple[Vec2, float]:
        if origin is None and scale is None:
            return self.origin, self.scale
        return (
            self.origin if origin is None else _vec2(origin, "Origin"),
            self.scale if scale is None else _check_scale(scale),
        )

    def evaluate(
        self,
        active: int,
        active_position: Vec2,
        origin: Optional[Vec2] = None,
        scale: Optional[float] = None,
    ) -> EvaluationResult:
        """Derive all three weights and device positions from the active handle.

        Raises DegenerateSystemError when the two derived directions are parallel.
        """
        slot = ActiveIndex.coerce(active)
        origin, scale = self._mapping(origin, scale)

        a_i = self.direction(slot)
        k_i = project(to_vector_space(active_position, origin, scale), a_i)

        j, k = _others(slot)
        r = ConstraintSolver.residual(self.target, k_i, a_i)
        try:
            k_j, k_k = ConstraintSolver.solve_pair(self.direction(j), self.direction(k), r, self.epsilon)
        except DegenerateSystemError as ex:
            raise DegenerateSystemError(
                f"no solution with a{int(slot)} active: a{j} and a{k} are parallel",
                det=ex.det,
                pair=(j, k),
            ) from ex

        weights: List[float] = [0.0, 0.0, 0.0]
        weights[int(slot) - 1] = k_i
        weights[j - 1] = k_j
        weights[k - 1] = k_k
        positions = self._positions(weights, origin, scale)
        logger.debug("evaluate a%d: k=(%.6g, %.6g, %.6g)", int(slot), *weights)
        return EvaluationResult(slot, tuple(weights), positions, self.directions)  # type: ignore[arg-type]

    def try_evaluate(
        self,
        active: int,
        active_position: Vec2,
        origin: Optional[Vec2] = None,
        scale: Optional[float] = None,
    ) -> Tuple[Optional[EvaluationResult], Optional[str]]:
        """Like :meth:`evaluate`, but returns (result, error_message)."""
        try:
            return self.evaluate(active, active_position, origin, scale), None
        except DegenerateSystemError as ex:
            return None, str(ex)

    def _positions(self, weights, origin: Vec2, scale: float) -> Tuple[Vec2, Vec2, Vec2]:
        out = []
        for w, d in zip(weights, self.directions):
            vx, vy = position_for(w, d)
            out.append(to_device(vx, vy, origin, scale))
        return tuple(out)  # type: ignore[return-value]

    def positions_for_weights(
        self,
        weights: Tuple[float, float, float],
        origin: Optional[Vec2] = None,
        scale: Optional[float] = None,
    ) -> Tuple[Vec2, Vec2, Vec2]:
        origin, scale = self._mapping(origin, scale)
        return self._positions(weights, origin, scale)

    def degenerate_slots(self) -> List[ActiveIndex]:
        """Active choices whose two derived directions are parallel."""
        out: List[ActiveIndex] = []
        for slot in ActiveIndex:
            j, k = _others(slot)
            try:
                ConstraintSolver.solve_pair(self.direction(j), self.direction(k), (0.0, 0.0), self.epsilon)
            except DegenerateSystemError:
                out.append(slot)
        return out

    def evaluate_line_constraint(
        self,
        direction: Vec2,
        free_position: Vec2,
        origin: Optional[Vec2] = None,
        scale: Optional[float] = None,
    ) -> LineConstraintResult:
        origin, scale = self._mapping(origin, scale)
        return evaluate_line_constraint(direction, free_position, origin, scale)


def evaluate_line_constraint(direction: Vec2, free_position: Vec2, origin: Vec2, scale: float) -> LineConstraintResult:
    """Snap a free handle onto the line through the origin along ``direction``.

    Independent of any three-weight rig. Raises ConfigurationError for a zero
    or non-finite direction and for an unusable origin or scale.
    """
    direction = _vec2(direction, "Line direction")
    origin = _vec2(origin, "Origin")
    scale = _check_scale(scale)
    k, constrained, foot = ConstraintSolver.solve_point_on_line(
        direction, to_vector_space(free_position, origin, scale)
    )
    return LineConstraintResult(
        k,
        to_device(constrained[0], constrained[1], origin, scale),
        to_device(foot[0], foot[1], origin, scale),
    )
