# -*- coding: utf-8 -*-
"""Scene configuration (coordinate mapping, direction vectors, target, line).

Scenes are plain JSON::

    {
      "origin": [960, 540],
      "scale": 100,
      "parameters": {"s": 1},
      "directions": [[1, 2], [2, 3], ["3*s", 1]],
      "target": [4, 2],
      "initial_weights": [-1, 1, 1],
      "line": {"equation": [2, -3]},
      "epsilon": 1e-9
    }

Every number may be an expression string; see :mod:`expression_service`.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from .errors import ConfigurationError
from .geometry import Vec2, direction_from_equation, is_zero_vector
from .parameters import ParameterRegistry


@dataclass
class SceneConfig:
    origin: Vec2 = (960.0, 540.0)
    scale: float = 100.0
    directions: Tuple[Vec2, Vec2, Vec2] = ((1.0, 2.0), (2.0, 3.0), (3.0, 1.0))
    target: Vec2 = (4.0, 2.0)
    initial_weights: Tuple[float, float, float] = (-1.0, 1.0, 1.0)
    line_direction: Vec2 = (3.0, 2.0)
    epsilon: float = 1e-9
    parameters: Dict[str, float] = field(default_factory=dict)

    def validate(self) -> "SceneConfig":
        if not math.isfinite(self.scale) or self.scale == 0.0:
            raise ConfigurationError(f"Scale must be finite and non-zero, got {self.scale!r}")
        if not (math.isfinite(self.epsilon) and self.epsilon > 0.0):
            raise ConfigurationError(f"Epsilon must be positive, got {self.epsilon!r}")
        if len(self.directions) != 3:
            raise ConfigurationError(f"Expected three direction vectors, got {len(self.directions)}")
        for idx, d in enumerate(self.directions, start=1):
            if is_zero_vector(d):
                raise ConfigurationError(f"Direction a{idx} is the zero vector")
        if len(self.initial_weights) != 3:
            raise ConfigurationError("Expected three initial weights")
        if is_zero_vector(self.line_direction):
            raise ConfigurationError("Line direction is the zero vector")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SceneConfig":
        if not isinstance(data, dict):
            raise ConfigurationError("Scene must be a JSON object")
        defaults = cls()
        registry = ParameterRegistry()
        registry.load_dict(data.get("parameters") or {})

        origin = registry.resolve_vec(data.get("origin", defaults.origin), what="origin")
        scale = registry.resolve(data.get("scale", defaults.scale), what="scale")

        raw_dirs = data.get("directions", defaults.directions)
        if isinstance(raw_dirs, (str, bytes)) or not isinstance(raw_dirs, (list, tuple)) or len(raw_dirs) != 3:
            raise ConfigurationError(f"Expected three direction vectors, got {raw_dirs!r}")
        directions = tuple(registry.resolve_vec(d, what=f"a{i}") for i, d in enumerate(raw_dirs, start=1))

        target = registry.resolve_vec(data.get("target", defaults.target), what="target")

        raw_weights = data.get("initial_weights", defaults.initial_weights)
        if isinstance(raw_weights, (str, bytes)) or not isinstance(raw_weights, (list, tuple)) or len(raw_weights) != 3:
            raise ConfigurationError(f"Expected three initial weights, got {raw_weights!r}")
        weights = tuple(registry.resolve(w, what=f"k{i}") for i, w in enumerate(raw_weights, start=1))

        line = data.get("line") or {}
        if not isinstance(line, dict):
            raise ConfigurationError("'line' must be an object")
        if "equation" in line:
            p, q = registry.resolve_vec(line["equation"], what="line.equation")
            line_direction = direction_from_equation(p, q)
        else:
            line_direction = registry.resolve_vec(line.get("direction", defaults.line_direction), what="line.direction")

        epsilon = registry.resolve(data.get("epsilon", defaults.epsilon), what="epsilon")

        cfg = cls(
            origin=origin,
            scale=scale,
            directions=directions,  # type: ignore[arg-type]
            target=target,
            initial_weights=weights,  # type: ignore[arg-type]
            line_direction=line_direction,
            epsilon=epsilon,
            parameters=dict(registry.params),
        )
        return cfg.validate()

    @classmethod
    def load_json(cls, path: str | Path) -> "SceneConfig":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as ex:
            raise ConfigurationError(f"Cannot read scene {str(path)!r}: {ex}") from ex
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": list(self.origin),
            "scale": self.scale,
            "parameters": dict(self.parameters),
            "directions": [list(d) for d in self.directions],
            "target": list(self.target),
            "initial_weights": list(self.initial_weights),
            "line": {"direction": list(self.line_direction)},
            "epsilon": self.epsilon,
        }
