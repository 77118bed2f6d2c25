"""
Tower Canvas
Paints the rods and disks of the live tower plus the disk in flight.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from hanoivisualizer.model.animation import RodLayout
from hanoivisualizer.model.moves import ROD_NAMES

if TYPE_CHECKING:
    from hanoivisualizer.controller.puzzle import PuzzleController


class TowerView(QWidget):
    # One color per disk size, gray beyond
    DISK_COLORS = [
        '#ff0000',  # Red
        '#ffa500',  # Orange
        '#ffd700',  # Yellow
        '#008000',  # Green
        '#0000ff',  # Blue
        '#4b0082',  # Indigo
        '#ee82ee',  # Violet
        '#800080',  # Purple
    ]
    FALLBACK_COLOR = '#808080'

    def __init__(self, controller: PuzzleController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.setMinimumSize(450, 400)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        # Any change -> repaint, the view always reads the live state
        self.controller.state_changed.connect(self._refresh)
        self.controller.animation_frame.connect(self._refresh)
        self.controller.animation_finished.connect(self._refresh)

    def _refresh(self, *_args) -> None:
        self.update()

    @classmethod
    def disk_color(cls, disk: int) -> QColor:
        if 1 <= disk <= len(cls.DISK_COLORS):
            return QColor(cls.DISK_COLORS[disk - 1])
        return QColor(cls.FALLBACK_COLOR)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor('white'))

        layout = self.controller.layout

        # Fit the layout box into the widget, keeping the aspect ratio
        scale = min(self.width() / layout.width, self.height() / layout.height)
        painter.translate(
            (self.width() - layout.width * scale) / 2,
            (self.height() - layout.height * scale) / 2,
        )
        painter.scale(scale, scale)

        self._draw_rods(painter, layout)

        in_flight = self.controller.in_flight
        for rod, stack in enumerate(self.controller.snapshot()):
            for level, disk in enumerate(stack):
                # The animated disk is still on its source rod in the state
                if in_flight and rod == in_flight[0].source and level == len(stack) - 1:
                    continue
                x, top = layout.resting_position(rod, level)
                self._draw_disk(painter, layout, disk, x, top)

        if in_flight:
            move, (x, top) = in_flight
            self._draw_disk(painter, layout, move.disk, x, top)

        painter.end()

    @staticmethod
    def _draw_rods(painter: QPainter, layout: RodLayout) -> None:
        painter.setPen(Qt.NoPen)
        font = QFont("Arial", 12)
        for rod, name in enumerate(ROD_NAMES):
            x = layout.rod_x(rod)

            # Base
            painter.setBrush(QBrush(QColor('#a52a2a')))
            painter.drawRect(QRectF(x - layout.max_disk_width / 2, layout.base_y, layout.max_disk_width, 10))

            # Rod
            painter.setBrush(QBrush(QColor('#808080')))
            painter.drawRect(QRectF(x - 2, layout.base_y - layout.rod_height, 4, layout.rod_height))

            # Label
            painter.setPen(QColor('black'))
            painter.setFont(font)
            painter.drawText(QRectF(x - 10, layout.base_y + 15, 20, 20), Qt.AlignCenter, name)
            painter.setPen(Qt.NoPen)

    def _draw_disk(self, painter: QPainter, layout: RodLayout, disk: int, x: float, top: float) -> None:
        width = layout.disk_width(disk)
        rect = QRectF(x - width / 2, top, width, layout.disk_height)

        painter.setPen(QPen(QColor('black'), 1))
        painter.setBrush(QBrush(self.disk_color(disk)))
        painter.drawRect(rect)

        if layout.disk_height >= 10:
            painter.setPen(QColor('white'))
            painter.setFont(QFont("Arial", 8))
            painter.drawText(rect, Qt.AlignCenter, str(disk))
