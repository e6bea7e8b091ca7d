# -*- coding: utf-8 -*-
"""Plot window for sweep frames.

Plots the three weights against the driving (active) weight and exports
SVG or CSV.
"""

from __future__ import annotations

from typing import Any, Dict, List

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFileDialog, QMessageBox
)

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from ..core.sweep import write_frames_csv


class PlotWindow(QMainWindow):
    def __init__(self, frames: List[Dict[str, Any]], summary: Dict[str, Any]):
        super().__init__()
        self.setWindowTitle("Sweep")
        self.resize(900, 600)
        self._frames = frames or []
        self._summary = summary or {}

        root = QWidget(self)
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)

        bar = QHBoxLayout()
        rate = float(self._summary.get("success_rate", 0.0))
        self.lbl_summary = QLabel(
            f"{self._summary.get('n_steps', 0)} frames, {rate:.0%} solved, "
            f"max residual {float(self._summary.get('max_residual', 0.0)):.3g}"
        )
        bar.addWidget(self.lbl_summary, 1)
        self.btn_export_svg = QPushButton("Export SVG")
        self.btn_export_csv = QPushButton("Export CSV")
        bar.addWidget(self.btn_export_svg)
        bar.addWidget(self.btn_export_csv)
        layout.addLayout(bar)

        self.fig = Figure(figsize=(6, 4))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvas(self.fig)
        layout.addWidget(self.canvas, 1)

        self.btn_export_svg.clicked.connect(self.export_svg)
        self.btn_export_csv.clicked.connect(self.export_csv)
        self.plot()

    def _series(self, key: str) -> List[float]:
        return [float("nan") if r.get(key) is None else float(r[key]) for r in self._frames]

    def plot(self):
        self.ax.clear()
        if self._frames:
            x = self._series("k_active")
            for key in ("k1", "k2", "k3"):
                self.ax.plot(x, self._series(key), label=key)
            self.ax.set_xlabel(f"k{self._frames[0].get('active')} (driving)")
            self.ax.legend()
        self.ax.set_ylabel("weight")
        self.ax.grid(True)
        self.canvas.draw_idle()

    def export_svg(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export SVG", "", "SVG (*.svg)")
        if not path:
            return
        if not path.lower().endswith(".svg"):
            path += ".svg"
        try:
            self.fig.savefig(path, format="svg")
        except OSError as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def export_csv(self):
        if not self._frames:
            QMessageBox.information(self, "Export", "No data to export.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export CSV", "", "CSV (*.csv)")
        if not path:
            return
        if not path.lower().endswith(".csv"):
            path += ".csv"
        try:
            write_frames_csv(self._frames, path)
        except OSError as e:
            QMessageBox.critical(self, "Export failed", str(e))
