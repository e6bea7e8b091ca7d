# -*- coding: utf-8 -*-
"""Headless sweeps: drive the active weight over a range and record frames.

Used to sample a reveal animation (one frame per sample) or to plot how the
derived weights respond to the active one.
"""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .engine import ActiveIndex, LinearCombinationEngine
from .geometry import position_for, to_device
from ..utils.logger import logger

FRAME_KEYS = ("frame", "active", "k_active", "k1", "k2", "k3", "success", "residual")


@dataclass
class SweepSettings:
    start: float
    end: float
    step: float = 0.1
    step_count: Optional[int] = None

    def samples(self) -> np.ndarray:
        """Active weights to visit, end inclusive."""
        if self.step_count is not None:
            n = int(self.step_count)
            if n < 1:
                raise ValueError(f"step_count must be at least 1, got {self.step_count!r}")
            if n == 1:
                return np.array([float(self.start)])
            return np.linspace(float(self.start), float(self.end), n)
        step = abs(float(self.step)) or 1.0
        if self.end < self.start:
            step = -step
        n = int(math.floor((float(self.end) - float(self.start)) / step + 1e-9)) + 1
        return float(self.start) + step * np.arange(max(n, 1), dtype=float)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SweepSettings":
        step_count = data.get("step_count")
        return cls(
            start=float(data.get("start", 0.0)),
            end=float(data.get("end", 0.0)),
            step=float(data.get("step", 0.1)),
            step_count=None if step_count is None else int(round(float(step_count))),
        )


def sweep_active(
    engine: LinearCombinationEngine,
    active: int,
    settings: SweepSettings,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """Evaluate the rig once per sampled active weight.

    Returns (frames, summary). Degenerate samples are recorded with
    ``success=False`` rather than aborting the sweep.
    """
    slot = ActiveIndex.coerce(active)
    a = engine.direction(slot)
    b = np.asarray(engine.target, dtype=float)
    dirs = np.asarray(engine.directions, dtype=float)

    frames: List[Dict[str, Any]] = []
    reason = ""
    for frame_idx, k in enumerate(settings.samples()):
        vx, vy = position_for(float(k), a)
        handle = to_device(vx, vy, engine.origin, engine.scale)
        result, err = engine.try_evaluate(slot, handle)
        rec: Dict[str, Any] = {"frame": frame_idx, "active": int(slot), "k_active": float(k)}
        if result is None:
            if not reason:
                reason = err or "degenerate"
                logger.warning("sweep a%d: %s", int(slot), reason)
            rec.update({"k1": None, "k2": None, "k3": None, "success": False, "residual": None})
        else:
            weights = np.asarray(result.weights, dtype=float)
            residual = float(np.linalg.norm(weights @ dirs - b))
            rec.update({
                "k1": result.k1,
                "k2": result.k2,
                "k3": result.k3,
                "success": True,
                "residual": residual,
            })
        frames.append(rec)

    ok = [f for f in frames if f["success"]]
    summary = {
        "success": bool(frames) and len(ok) == len(frames),
        "reason": reason or "ok",
        "success_rate": (len(ok) / float(len(frames))) if frames else 0.0,
        "n_steps": len(frames),
        "max_residual": max((f["residual"] for f in ok), default=0.0),
    }
    return frames, summary


def write_frames_csv(frames: List[Dict[str, Any]], path: str | Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(FRAME_KEYS))
        w.writeheader()
        for rec in frames:
            w.writerow({k: rec.get(k) for k in FRAME_KEYS})
