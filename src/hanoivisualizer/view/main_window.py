"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar and the two workflow tabs.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: The tab bar switches the control panel (left) and the display
   (right) together: tower canvas for the puzzle, chart for the benchmark.
"""
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QTabBar, QStackedWidget, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from hanoivisualizer.app import VISIBLE_APP_NAME
from hanoivisualizer.controller.benchmark import BenchmarkRunner
from hanoivisualizer.controller.puzzle import PuzzleController
from hanoivisualizer.view.tabs.tab_benchmark import BenchmarkControlPanel
from hanoivisualizer.view.tabs.tab_puzzle import PuzzleControlPanel
from hanoivisualizer.view.widgets.benchmark_plot import BenchmarkPlot
from hanoivisualizer.view.widgets.tower_view import TowerView


class MainWindow(QMainWindow):
    def __init__(self, puzzle: PuzzleController, benchmark: BenchmarkRunner) -> None:
        super().__init__()
        self.puzzle = puzzle
        self.benchmark = benchmark

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1100, 650)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        # Vertical Layout: Tabs on Top, Splitter Below
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setDrawBase(True)
        self.tab_bar.setExpanding(True)
        self.tab_bar.addTab("1. Puzzle")
        self.tab_bar.addTab("2. Benchmark")
        self.tab_bar.setStyleSheet("""
                    QTabBar::tab { height: 35px; min-width: 100px; }
                    QTabBar::tab:selected { font-weight: bold; }
                """)
        main_layout.addWidget(self.tab_bar)

        # --- 2. SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- RIGHT SIDE: Displays (Stacked) ---
        self.tower_view = TowerView(self.puzzle)
        self.benchmark_plot = BenchmarkPlot()

        self.display_stack = QStackedWidget()
        self.display_stack.addWidget(self.tower_view)      # Index 0
        self.display_stack.addWidget(self.benchmark_plot)  # Index 1

        # --- LEFT SIDE: Control Panels (Stacked) ---
        self.puzzle_panel = PuzzleControlPanel(self.puzzle)
        self.benchmark_panel = BenchmarkControlPanel(self.benchmark, self.benchmark_plot)

        # Order must match Tab Bar order
        self.controls_stack = QStackedWidget()
        self.controls_stack.addWidget(self.puzzle_panel)     # Index 0
        self.controls_stack.addWidget(self.benchmark_panel)  # Index 1

        splitter.addWidget(self.controls_stack)
        splitter.addWidget(self.display_stack)
        splitter.setSizes([320, 780])

        # --- SIGNAL CONNECTIONS ---
        self.tab_bar.currentChanged.connect(self.controls_stack.setCurrentIndex)
        self.tab_bar.currentChanged.connect(self.display_stack.setCurrentIndex)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Start with the default tower on screen
        self.puzzle_panel.on_init_clicked()

    def _create_actions(self) -> None:
        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

        self.act_about = QAction("About", self)
        self.act_about.triggered.connect(self.on_about)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        file_menu.addAction(self.act_exit)

        help_menu = self.menuBar().addMenu("Help")
        help_menu.addAction(self.act_about)

    def on_about(self) -> None:
        QMessageBox.about(
            self,
            VISIBLE_APP_NAME,
            "Generates the optimal move sequence for the Tower of Hanoi, "
            "animates it move by move and benchmarks the planner."
        )

    def closeEvent(self, event) -> None:
        self.puzzle.pause()
        self.benchmark.stop()
        super().closeEvent(event)
