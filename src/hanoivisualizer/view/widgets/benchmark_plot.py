"""Line chart of planning time against disk count."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from PySide6.QtWidgets import QWidget

if TYPE_CHECKING:
    from hanoivisualizer.model.timing import TimingSeries


logger = logging.getLogger(__name__)


class BenchmarkPlot(pg.PlotWidget):
    COLOR = '#1f77b4'  # Blue

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._disks: list[int] = []
        self._elapsed: list[float] = []

        self.setBackground('w')
        self.showGrid(x=True, y=True, alpha=0.3)
        self.setLabel('bottom', 'Disks', color='black')
        self.setLabel('left', 'Time [ms]', color='black')
        self.setTitle('Planning Time vs. Disk Count', color='black', size='14pt')
        self.getAxis('bottom').setPen('k')
        self.getAxis('left').setPen('k')
        self.getAxis('bottom').setTextPen('k')
        self.getAxis('left').setTextPen('k')

        self.curve = self.plot(
            [], [],
            pen=pg.mkPen(color=self.COLOR, width=2),
            symbol='o',
            symbolSize=6,
            symbolBrush=self.COLOR,
            symbolPen=None,
        )

    @property
    def sample_count(self) -> int:
        return len(self._disks)

    def clear_samples(self) -> None:
        self._disks.clear()
        self._elapsed.clear()
        self.curve.setData([], [])

    def add_sample(self, disk_count: int, elapsed_ms: float) -> None:
        self._disks.append(disk_count)
        self._elapsed.append(elapsed_ms)
        self.curve.setData(np.array(self._disks), np.array(self._elapsed))

    def set_series(self, series: TimingSeries) -> None:
        disks, elapsed = series.as_arrays()
        self._disks = disks.tolist()
        self._elapsed = elapsed.tolist()
        self.curve.setData(disks, elapsed)
        self.autoRange()

    def export_image(self, file_path: str, width: int = 1920) -> None:
        exporter = ImageExporter(self.plotItem)
        exporter.parameters()['width'] = width
        exporter.export(file_path)
        logger.info(f"Plot exported to {file_path}")
