"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the puzzle session and the controllers.
2. Instantiates the Main Window (View) and hands it the controllers.
3. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys

import pyqtgraph as pg

from hanoivisualizer.app import create_app
from hanoivisualizer.logging_config import setup_logging
from hanoivisualizer.controller.benchmark import BenchmarkRunner
from hanoivisualizer.controller.puzzle import PuzzleController
from hanoivisualizer.view.main_window import MainWindow


def main() -> int:
    # 1. Setup Logging (Console + Optional File)
    # Use logging.DEBUG to follow every move and animation
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = create_app()
    pg.setConfigOption("background", "w")
    pg.setConfigOption("foreground", "k")

    # 3. Controllers (own the model objects)
    puzzle = PuzzleController()
    benchmark = BenchmarkRunner()

    # 4. Main Window
    window = MainWindow(puzzle, benchmark)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
