# -*- coding: utf-8 -*-
"""Drag controller: the host-side state that feeds the engine.

The engine is stateless; this object is where a host keeps what it needs
between samples: the active slot, one handle position per slot, the last
valid evaluation (kept on screen while the rig is degenerate) and a status
line. It does not import Qt so it can be driven headless.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from .engine import ActiveIndex, EvaluationResult, LineConstraintResult, LinearCombinationEngine
from .geometry import Vec2, position_for, to_device
from .scene import SceneConfig
from ..utils.logger import logger


class DragController:
    def __init__(self, scene: SceneConfig, on_change: Optional[Callable[[], None]] = None):
        self.scene = scene
        self.engine = LinearCombinationEngine.from_scene(scene)
        self._on_change = on_change
        self.active = ActiveIndex.A1
        self.status = ""
        self.result: Optional[EvaluationResult] = None
        self.handles: Dict[int, Vec2] = {}
        for slot, pos in zip(ActiveIndex, self.engine.positions_for_weights(scene.initial_weights)):
            self.handles[int(slot)] = pos

        lx, ly = position_for(1.0, scene.line_direction)
        self.line_handle: Vec2 = to_device(lx, ly, scene.origin, scene.scale)
        self.line_result: LineConstraintResult = self.engine.evaluate_line_constraint(
            scene.line_direction, self.line_handle
        )
        self._evaluate()

    def _changed(self):
        if self._on_change:
            self._on_change()

    def _evaluate(self) -> Optional[EvaluationResult]:
        slot = int(self.active)
        result, err = self.engine.try_evaluate(slot, self.handles[slot])
        if result is None:
            # Keep the last valid derived positions on screen.
            if err != self.status:
                logger.warning("%s", err)
            self.status = err or "no solution for this configuration"
            return None
        self.result = result
        self.status = ""
        for s in ActiveIndex:
            if s != self.active:
                self.handles[int(s)] = result.position(s)
        return result

    def positions(self) -> Tuple[Vec2, Vec2, Vec2]:
        if self.result is not None:
            return self.result.positions
        return tuple(self.handles[int(s)] for s in ActiveIndex)  # type: ignore[return-value]

    def degenerate_slots(self):
        return self.engine.degenerate_slots()

    def set_active(self, slot: int) -> Optional[EvaluationResult]:
        """Hand the active role to ``slot``; its current handle becomes the input."""
        self.active = ActiveIndex.coerce(slot)
        result = self._evaluate()
        self._changed()
        return result

    def drag(self, slot: int, x: float, y: float) -> Vec2:
        """Feed one drag sample. Returns where the dragged handle should be drawn.

        Derived slots are read-only: dragging them is refused and their
        current position is returned unchanged.
        """
        slot = ActiveIndex.coerce(slot)
        if slot != self.active:
            return self.positions()[int(slot) - 1]
        self.handles[int(slot)] = (float(x), float(y))
        self._evaluate()
        self._changed()
        return self.positions()[int(slot) - 1]

    def drag_line_point(self, x: float, y: float) -> LineConstraintResult:
        self.line_handle = (float(x), float(y))
        self.line_result = self.engine.evaluate_line_constraint(self.scene.line_direction, self.line_handle)
        self._changed()
        return self.line_result
