# -*- coding: utf-8 -*-
"""Graphics items used in the QGraphicsScene.

Scene coordinates are device coordinates: the same pixels the engine maps
vector space into, so item positions can be handed to the controller as-is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt, QPointF, QLineF
from PyQt6.QtGui import QPen, QPainterPath
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsEllipseItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsSimpleTextItem,
)

from ..core.geometry import position_for, to_device
from ..utils.constants import DARK, FOOT, GRAY, GRID, GRID_EXTENT, HANDLE_RADIUS, HILITE, SLOT_COLORS, TARGET

if TYPE_CHECKING:
    from ..core.controller import DragController


class TextMarker(QGraphicsSimpleTextItem):
    def __init__(self, text: str = ""):
        super().__init__(text)
        self.setZValue(30)
        self.setBrush(DARK)
        # Markers should not intercept mouse events.
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setAcceptHoverEvents(False)


class GridItem(QGraphicsPathItem):
    """Unit grid plus the two axes, centered on the scene origin."""

    def __init__(self, ctrl: "DragController"):
        super().__init__()
        self.setZValue(-10)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        scene = ctrl.scene
        path = QPainterPath()
        n = GRID_EXTENT
        for i in range(-n, n + 1):
            x0, y0 = to_device(i, -n, scene.origin, scene.scale)
            x1, y1 = to_device(i, n, scene.origin, scene.scale)
            path.moveTo(x0, y0); path.lineTo(x1, y1)
            x0, y0 = to_device(-n, i, scene.origin, scene.scale)
            x1, y1 = to_device(n, i, scene.origin, scene.scale)
            path.moveTo(x0, y0); path.lineTo(x1, y1)
        self.setPath(path)
        self.setPen(QPen(GRID, 1))

        self.axes = QGraphicsPathItem(self)
        axes = QPainterPath()
        axes.moveTo(*to_device(-n, 0, scene.origin, scene.scale)); axes.lineTo(*to_device(n, 0, scene.origin, scene.scale))
        axes.moveTo(*to_device(0, -n, scene.origin, scene.scale)); axes.lineTo(*to_device(0, n, scene.origin, scene.scale))
        self.axes.setPath(axes)
        self.axes.setPen(QPen(GRAY, 2))


class DirectionLineItem(QGraphicsLineItem):
    """Infinite-looking line through the origin along a direction vector."""

    def __init__(self, ctrl: "DragController", direction, color):
        super().__init__()
        self.setZValue(0)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        scene = ctrl.scene
        span = 2.0 * GRID_EXTENT / max(abs(direction[0]), abs(direction[1]))
        p0 = to_device(*position_for(-span, direction), scene.origin, scene.scale)
        p1 = to_device(*position_for(span, direction), scene.origin, scene.scale)
        self.setLine(QLineF(QPointF(*p0), QPointF(*p1)))
        pen = QPen(color, 1.5)
        pen.setStyle(Qt.PenStyle.DashLine)
        self.setPen(pen)


class _DraggableItem(QGraphicsEllipseItem):
    def __init__(self, radius: float = HANDLE_RADIUS):
        super().__init__(-radius, -radius, 2 * radius, 2 * radius)
        self._internal = False
        self.setFlags(
            QGraphicsItem.GraphicsItemFlag.ItemIsMovable
            | QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges
        )
        self.setZValue(10)

    def place(self, x: float, y: float):
        """Move without feeding the position back into the controller."""
        self._internal = True
        try:
            self.setPos(QPointF(x, y))
        finally:
            self._internal = False


class HandleItem(_DraggableItem):
    """Control point of one rig slot. Only the active slot follows the mouse."""

    def __init__(self, slot: int, ctrl: "DragController"):
        super().__init__()
        self.slot = slot
        self.ctrl = ctrl
        self.setBrush(SLOT_COLORS[slot])
        self.sync_style()

    def sync_style(self):
        active = int(self.ctrl.active) == self.slot
        self.setPen(QPen(HILITE, 3) if active else QPen(Qt.GlobalColor.black, 1))
        self.setCursor(Qt.CursorShape.OpenHandCursor if active else Qt.CursorShape.ArrowCursor)

    def itemChange(self, change, val):
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionChange and not self._internal:
            x, y = self.ctrl.drag(self.slot, float(val.x()), float(val.y()))
            return QPointF(x, y)
        return super().itemChange(change, val)


class LineHandleItem(_DraggableItem):
    """Free point snapped onto the scene's constraint line."""

    def __init__(self, ctrl: "DragController"):
        super().__init__()
        self.ctrl = ctrl
        self.setBrush(TARGET)
        self.setPen(QPen(Qt.GlobalColor.black, 1))

    def itemChange(self, change, val):
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionChange and not self._internal:
            res = self.ctrl.drag_line_point(float(val.x()), float(val.y()))
            return QPointF(*res.constrained_pos)
        return super().itemChange(change, val)


class FootItem(QGraphicsEllipseItem):
    """Foot of the perpendicular from the line handle to the x axis, with its drop line."""

    def __init__(self):
        super().__init__(-5, -5, 10, 10)
        self.setZValue(5)
        self.setBrush(FOOT)
        self.setPen(QPen(Qt.PenStyle.NoPen))
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.drop = QGraphicsLineItem()
        pen = QPen(FOOT, 2)
        pen.setDashPattern([5.0, 4.0])
        self.drop.setPen(pen)
        self.drop.setZValue(4)
        self.drop.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

    def sync(self, constrained, foot):
        self.setPos(QPointF(*foot))
        self.drop.setLine(QLineF(QPointF(*constrained), QPointF(*foot)))


class TargetItem(QGraphicsLineItem):
    """Arrow body from the origin to the target vector b."""

    def __init__(self, ctrl: "DragController"):
        super().__init__()
        scene = ctrl.scene
        tip = to_device(scene.target[0], scene.target[1], scene.origin, scene.scale)
        self.setLine(QLineF(QPointF(*scene.origin), QPointF(*tip)))
        self.setPen(QPen(TARGET, 3))
        self.setZValue(1)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.label = TextMarker("b")
        self.label.setPos(tip[0] + 6, tip[1] - 18)

