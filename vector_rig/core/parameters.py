# -*- coding: utf-8 -*-
"""Named scene parameters.

Scene files can declare ``"parameters": {"s": 2}`` and then refer to ``s`` in
any numeric field. Parameters themselves may be expressions over parameters
declared before them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence

from .errors import ConfigurationError
from .expression_service import eval_param_expression
from .geometry import Vec2


def _is_valid_param_name(name: str) -> bool:
    name = (name or "").strip()
    if not name:
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    return all(ch.isalnum() or ch == "_" for ch in name)


@dataclass
class ParameterRegistry:
    """A simple parameter store used to resolve numeric scene fields."""

    params: Dict[str, float] = field(default_factory=dict)

    def set_param(self, name: str, value: Any):
        if not _is_valid_param_name(name):
            raise ConfigurationError(f"Invalid parameter name: {name!r}")
        self.params[str(name).strip()] = self.resolve(value, what=f"parameter {name!r}")

    def load_dict(self, items: Mapping[str, Any]):
        self.params.clear()
        for name, value in (items or {}).items():
            self.set_param(name, value)

    def resolve(self, value: Any, what: str = "value") -> float:
        val, err = eval_param_expression(value, self.params)
        if val is None:
            raise ConfigurationError(f"Invalid {what}: {err}")
        return val

    def resolve_vec(self, value: Any, what: str = "vector") -> Vec2:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
            raise ConfigurationError(f"Invalid {what}: expected two components, got {value!r}")
        return self.resolve(value[0], what=f"{what}.x"), self.resolve(value[1], what=f"{what}.y")
