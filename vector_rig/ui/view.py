# -*- coding: utf-8 -*-
"""Graphics view interaction (pan/zoom)."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QGraphicsView, QGraphicsScene

from ..utils.qt_safe import safe_event


class RigView(QGraphicsView):
    def __init__(self, scene: QGraphicsScene):
        super().__init__(scene)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self._rmb_down = False
        self._rmb_start = QPointF()

    @safe_event
    def wheelEvent(self, e):
        f = 1.25 if e.angleDelta().y() > 0 else 0.8
        self.scale(f, f)

    @safe_event
    def mousePressEvent(self, e):
        if e.button() == Qt.MouseButton.RightButton:
            self._rmb_down = True
            self._rmb_start = e.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            e.accept(); return
        super().mousePressEvent(e)

    @safe_event
    def mouseMoveEvent(self, e):
        if self._rmb_down:
            delta = e.position() - self._rmb_start
            self.horizontalScrollBar().setValue(self.horizontalScrollBar().value() - int(delta.x()))
            self.verticalScrollBar().setValue(self.verticalScrollBar().value() - int(delta.y()))
            self._rmb_start = e.position()
            e.accept(); return
        super().mouseMoveEvent(e)

    @safe_event
    def mouseReleaseEvent(self, e):
        if e.button() == Qt.MouseButton.RightButton and self._rmb_down:
            self._rmb_down = False
            self.unsetCursor()
            e.accept(); return
        super().mouseReleaseEvent(e)
