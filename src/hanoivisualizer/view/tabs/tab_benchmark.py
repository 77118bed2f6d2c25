"""
Benchmark Control Panel
Sweep settings, run/stop, progress and exports of the timing series.
"""
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QSpinBox, QDoubleSpinBox, QGroupBox, QFormLayout,
    QCheckBox, QProgressBar, QMessageBox, QFileDialog
)
from PySide6.QtCore import Qt

from hanoivisualizer.config import (
    DEFAULT_SWEEP_BUDGET_MS, DEFAULT_SWEEP_MAX, DEFAULT_SWEEP_MIN, MAX_SWEEP_DISKS
)
from hanoivisualizer.controller.benchmark import BenchmarkRunner
from hanoivisualizer.model.errors import InvalidConfiguration
from hanoivisualizer.model.timing import SweepResult
from hanoivisualizer.view.widgets.benchmark_plot import BenchmarkPlot

logger = logging.getLogger(__name__)


class BenchmarkControlPanel(QWidget):
    def __init__(self, runner: BenchmarkRunner, plot: BenchmarkPlot) -> None:
        super().__init__()
        self.runner = runner
        self.plot = plot

        layout = QVBoxLayout(self)

        # --- Sweep Settings ---
        grp_settings = QGroupBox("Sweep settings")
        form = QFormLayout(grp_settings)

        self.spin_min = QSpinBox()
        self.spin_min.setRange(0, MAX_SWEEP_DISKS)
        self.spin_min.setValue(DEFAULT_SWEEP_MIN)
        form.addRow("Minimum disks:", self.spin_min)

        self.spin_max = QSpinBox()
        self.spin_max.setRange(0, MAX_SWEEP_DISKS)
        self.spin_max.setValue(DEFAULT_SWEEP_MAX)
        form.addRow("Maximum disks:", self.spin_max)

        self.spin_budget = QDoubleSpinBox()
        self.spin_budget.setDecimals(1)
        self.spin_budget.setRange(0.1, 600.0)
        self.spin_budget.setValue(DEFAULT_SWEEP_BUDGET_MS / 1000.0)
        self.spin_budget.setSuffix(" s")
        self.spin_budget.setToolTip("The sweep stops once this wall-clock time is exceeded")
        form.addRow("Time budget:", self.spin_budget)

        self.chk_materialize = QCheckBox("")
        self.chk_materialize.setToolTip("Measure the full move-text list instead of the count-only recursion")
        form.addRow("Include move text:", self.chk_materialize)

        layout.addWidget(grp_settings)

        # --- Run ---
        grp_run = QGroupBox("Benchmark")
        l_run = QVBoxLayout(grp_run)

        self.btn_run = QPushButton("Run benchmark")
        self.btn_run.setMinimumHeight(40)
        self.btn_run.clicked.connect(self.on_run_clicked)
        l_run.addWidget(self.btn_run)

        self.progress = QProgressBar()
        self.progress.setVisible(False)
        self.progress.setTextVisible(True)
        l_run.addWidget(self.progress)

        self.lbl_status = QLabel("No measurements yet.")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        l_run.addWidget(self.lbl_status)

        layout.addWidget(grp_run)

        # --- Export ---
        grp_export = QGroupBox("Export")
        l_export = QVBoxLayout(grp_export)

        self.btn_export_csv = QPushButton("Export data (CSV)...")
        self.btn_export_csv.setEnabled(False)
        self.btn_export_csv.clicked.connect(self.on_export_csv_clicked)
        l_export.addWidget(self.btn_export_csv)

        self.btn_export_image = QPushButton("Export chart as image...")
        self.btn_export_image.setEnabled(False)
        self.btn_export_image.clicked.connect(self.on_export_image_clicked)
        l_export.addWidget(self.btn_export_image)

        layout.addWidget(grp_export)
        layout.addStretch()

        # --- RUNNER CONNECTIONS ---
        self.runner.sample_measured.connect(self.plot.add_sample)
        self.runner.progress_updated.connect(self.on_progress)
        self.runner.finished.connect(self.on_finished)
        self.runner.error_occurred.connect(self.on_error)

    def on_run_clicked(self) -> None:
        if self.runner.is_running:
            self.runner.stop()
            return

        self.plot.clear_samples()
        try:
            self.runner.start(
                self.spin_min.value(),
                self.spin_max.value(),
                budget_ms=self.spin_budget.value() * 1000.0,
                materialize=self.chk_materialize.isChecked(),
            )
        except InvalidConfiguration as e:
            logger.exception("Benchmark could not start")
            QMessageBox.warning(self, "Error", str(e))
            return

        self.btn_run.setText("Stop")
        self.btn_export_csv.setEnabled(False)
        self.btn_export_image.setEnabled(False)
        self.progress.setRange(0, 100)
        self.progress.setValue(0)
        self.progress.setVisible(True)

    def on_progress(self, percent: int, msg: str) -> None:
        self.progress.setValue(percent)
        self.lbl_status.setText(msg)

    def on_finished(self, result: SweepResult) -> None:
        self.btn_run.setText("Run benchmark")
        self.progress.setVisible(False)

        text = f"Completed {result.completed} of {result.requested} points in {result.total_ms / 1000.0:.1f} s."
        if result.budget_exhausted:
            text += " Time budget exceeded."
        elif result.cancelled:
            text += " Stopped."
        self.lbl_status.setText(text)

        has_data = result.completed > 0
        self.btn_export_csv.setEnabled(has_data)
        self.btn_export_image.setEnabled(has_data)
        if has_data:
            self.plot.set_series(result.series)

    def on_error(self, msg: str) -> None:
        self.btn_run.setText("Run benchmark")
        self.progress.setVisible(False)
        QMessageBox.critical(self, "Benchmark Error", msg)

    def on_export_csv_clicked(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save measurements", "hanoi_benchmark.csv", "CSV (*.csv)"
        )
        if not file_path:
            return

        try:
            self.runner.series.to_csv(file_path)
        except OSError as e:
            logger.exception("Failed to export measurements")
            QMessageBox.critical(self, "Export Error", f"Could not export data:\n{str(e)}")

    def on_export_image_clicked(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save chart as image",
            "hanoi_benchmark.png",
            "PNG image (*.png);;JPEG image (*.jpg)"
        )
        if not file_path:
            return

        try:
            self.plot.export_image(file_path)
        except Exception as e:
            logger.exception("Failed to export plot")
            QMessageBox.critical(self, "Export Error", f"Could not export chart:\n{str(e)}")
