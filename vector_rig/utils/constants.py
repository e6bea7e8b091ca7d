# -*- coding: utf-8 -*-
"""UI constants and colors."""

from PyQt6.QtGui import QColor

DARK = QColor(40, 40, 40)
GRAY = QColor(160, 160, 160)
GRID = QColor(225, 225, 225)
HILITE = QColor(0, 120, 255)
TARGET = QColor(220, 60, 60)
LINE = QColor(50, 150, 255)
FOOT = QColor(255, 128, 0)

SLOT_COLORS = {
    1: QColor(60, 180, 80),
    2: QColor(70, 120, 230),
    3: QColor(200, 60, 200),
}

HANDLE_RADIUS = 7
GRID_EXTENT = 10
