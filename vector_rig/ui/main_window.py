# -*- coding: utf-8 -*-
"""Main window: canvas, active-slot selector, weight readouts, sweep."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, QSignalBlocker
from PyQt6.QtWidgets import (
    QMainWindow, QGraphicsScene, QDockWidget, QStatusBar, QWidget, QFormLayout,
    QComboBox, QLabel, QDoubleSpinBox, QSpinBox, QPushButton
)

from ..core.controller import DragController
from ..core.engine import ActiveIndex
from ..core.scene import SceneConfig
from ..core.sweep import SweepSettings, sweep_active
from ..utils.constants import LINE, SLOT_COLORS
from .items import DirectionLineItem, FootItem, GridItem, HandleItem, LineHandleItem, TargetItem, TextMarker
from .plot_window import PlotWindow
from .view import RigView


class MainWindow(QMainWindow):
    def __init__(self, scene_config: Optional[SceneConfig] = None):
        super().__init__()
        self.setWindowTitle("Vector Rig")
        self.resize(1400, 900)
        self.ctrl = DragController(scene_config or SceneConfig(), on_change=self.sync_items)
        self.scene = QGraphicsScene(-1000, -1000, 4000, 3000)
        self.view = RigView(self.scene)
        self.setCentralWidget(self.view)
        self.setStatusBar(QStatusBar())
        self._plot: Optional[PlotWindow] = None
        self._syncing = False

        self._build_items()
        self._build_panel()
        self.sync_items()

    def _build_items(self):
        cfg = self.ctrl.scene
        self.scene.addItem(GridItem(self.ctrl))
        for slot in ActiveIndex:
            self.scene.addItem(DirectionLineItem(self.ctrl, cfg.directions[slot - 1], SLOT_COLORS[int(slot)]))
        target = TargetItem(self.ctrl)
        self.scene.addItem(target)
        self.scene.addItem(target.label)

        self.handles = {int(s): HandleItem(int(s), self.ctrl) for s in ActiveIndex}
        self.labels = {int(s): TextMarker() for s in ActiveIndex}
        for slot, item in self.handles.items():
            self.scene.addItem(item)
            self.scene.addItem(self.labels[slot])

        self.scene.addItem(DirectionLineItem(self.ctrl, cfg.line_direction, LINE))
        self.foot = FootItem()
        self.scene.addItem(self.foot)
        self.scene.addItem(self.foot.drop)
        self.line_handle = LineHandleItem(self.ctrl)
        self.scene.addItem(self.line_handle)

    def _build_panel(self):
        self.dock = QDockWidget("Rig", self)
        panel = QWidget()
        form = QFormLayout(panel)

        self.cb_active = QComboBox()
        degenerate = set(self.ctrl.degenerate_slots())
        for slot in ActiveIndex:
            self.cb_active.addItem(f"a{int(slot)}", int(slot))
            if slot in degenerate:
                # No solution when this slot drives the rig.
                self.cb_active.model().item(self.cb_active.count() - 1).setEnabled(False)
        self.cb_active.currentIndexChanged.connect(self._active_changed)
        form.addRow("Active", self.cb_active)

        self.lbl_k = {int(s): QLabel() for s in ActiveIndex}
        for slot, lbl in self.lbl_k.items():
            form.addRow(f"k{slot}", lbl)
        self.lbl_line = QLabel()
        form.addRow("line k", self.lbl_line)

        self.sp_start = QDoubleSpinBox(); self.sp_start.setRange(-100.0, 100.0); self.sp_start.setValue(-2.0)
        self.sp_end = QDoubleSpinBox(); self.sp_end.setRange(-100.0, 100.0); self.sp_end.setValue(2.0)
        self.sp_steps = QSpinBox(); self.sp_steps.setRange(1, 10000); self.sp_steps.setValue(41)
        form.addRow("Sweep from", self.sp_start)
        form.addRow("Sweep to", self.sp_end)
        form.addRow("Frames", self.sp_steps)
        self.btn_sweep = QPushButton("Sweep...")
        self.btn_sweep.clicked.connect(self.run_sweep)
        form.addRow(self.btn_sweep)

        self.dock.setWidget(panel)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.dock)

    def _active_changed(self, _index: int):
        slot = self.cb_active.currentData()
        if slot is not None:
            self.ctrl.set_active(int(slot))

    def sync_items(self):
        if self._syncing or not hasattr(self, "lbl_line"):
            return
        self._syncing = True
        try:
            with QSignalBlocker(self.cb_active):
                self.cb_active.setCurrentIndex(self.cb_active.findData(int(self.ctrl.active)))
            positions = self.ctrl.positions()
            for slot, item in self.handles.items():
                x, y = positions[slot - 1]
                item.place(x, y)
                item.sync_style()
                self.labels[slot].setPos(x + 10, y - 22)
            res = self.ctrl.result
            for slot, lbl in self.lbl_k.items():
                text = "-" if res is None else f"{res.weight(slot):.4f}"
                lbl.setText(text)
                self.labels[slot].setText(f"k{slot} = {text}")
            line = self.ctrl.line_result
            self.line_handle.place(*line.constrained_pos)
            self.foot.sync(line.constrained_pos, line.foot_pos)
            self.lbl_line.setText(f"{line.k:.4f}")
            self.statusBar().showMessage(self.ctrl.status or "Drag the highlighted point")
        finally:
            self._syncing = False

    def run_sweep(self):
        settings = SweepSettings(
            start=self.sp_start.value(),
            end=self.sp_end.value(),
            step_count=self.sp_steps.value(),
        )
        frames, summary = sweep_active(self.ctrl.engine, self.ctrl.active, settings)
        self._plot = PlotWindow(frames, summary)
        self._plot.show()
