"""
Puzzle Control Panel
Disk count, solve and step/play controls, and the move list.
"""
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSpinBox, QGroupBox, QFormLayout,
    QListWidget, QCheckBox, QMessageBox, QStyle
)
from PySide6.QtCore import Qt

from hanoivisualizer.config import DEFAULT_DISKS, MAX_GUI_DISKS, MIN_DISKS, ANIMATION_STEP
from hanoivisualizer.controller.puzzle import PuzzleController
from hanoivisualizer.model.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# Speed slider units -> animation step (5 -> 0.1 per tick)
SPEED_TO_STEP = ANIMATION_STEP / 5


class PuzzleControlPanel(QWidget):
    def __init__(self, controller: PuzzleController) -> None:
        super().__init__()
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Tower Settings ---
        grp_tower = QGroupBox("Tower")
        form = QFormLayout(grp_tower)

        self.spin_disks = QSpinBox()
        self.spin_disks.setRange(MIN_DISKS, MAX_GUI_DISKS)
        self.spin_disks.setValue(DEFAULT_DISKS)
        form.addRow("Number of disks:", self.spin_disks)

        hbox_tower = QHBoxLayout()
        self.btn_init = QPushButton("Create tower")
        self.btn_init.clicked.connect(self.on_init_clicked)
        hbox_tower.addWidget(self.btn_init)

        self.btn_solve = QPushButton("Find solution")
        self.btn_solve.setEnabled(False)
        self.btn_solve.clicked.connect(self.on_solve_clicked)
        hbox_tower.addWidget(self.btn_solve)
        form.addRow(hbox_tower)

        layout.addWidget(grp_tower)

        # --- Playback ---
        grp_play = QGroupBox("Playback")
        l_play = QVBoxLayout(grp_play)

        hbox_play = QHBoxLayout()
        self.btn_next = QPushButton("Next move")
        self.btn_next.setEnabled(False)
        self.btn_next.clicked.connect(self.on_next_clicked)
        hbox_play.addWidget(self.btn_next)

        self.btn_play = QPushButton()
        self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
        self.btn_play.setEnabled(False)
        self.btn_play.clicked.connect(self.controller.toggle_play)
        hbox_play.addWidget(self.btn_play)
        l_play.addLayout(hbox_play)

        self.chk_animate = QCheckBox("Animate moves")
        self.chk_animate.setChecked(self.controller.animated)
        self.chk_animate.toggled.connect(self.on_animate_toggled)
        l_play.addWidget(self.chk_animate)

        hbox_speed = QHBoxLayout()
        hbox_speed.addWidget(QLabel("Animation speed:"))
        self.spin_speed = QSpinBox()
        self.spin_speed.setRange(1, 50)
        self.spin_speed.setValue(5)
        self.spin_speed.valueChanged.connect(self.on_speed_changed)
        hbox_speed.addWidget(self.spin_speed)
        hbox_speed.addStretch()
        l_play.addLayout(hbox_speed)

        self.lbl_info = QLabel("Moves: 0")
        self.lbl_info.setAlignment(Qt.AlignCenter)
        l_play.addWidget(self.lbl_info)

        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        l_play.addWidget(self.lbl_status)

        layout.addWidget(grp_play)

        # --- Move List ---
        grp_moves = QGroupBox("Moves")
        l_moves = QVBoxLayout(grp_moves)
        self.moves_list = QListWidget()
        l_moves.addWidget(self.moves_list)
        layout.addWidget(grp_moves, stretch=1)

        # --- CONTROLLER CONNECTIONS ---
        self.controller.move_made.connect(self.on_move_made)
        self.controller.move_rejected.connect(self.on_move_rejected)
        self.controller.solution_finished.connect(self.on_solution_finished)
        self.controller.playing_changed.connect(self.update_play_icon)

    # --- PROPERTIES ---

    @property
    def status_message(self) -> str:
        return self.lbl_status.text()

    @status_message.setter
    def status_message(self, text: str) -> None:
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet("color: gray;")

    # --- SLOTS ---

    def on_init_clicked(self) -> None:
        try:
            self.controller.initialize(self.spin_disks.value())
        except InvalidConfiguration as e:
            logger.exception("Tower initialization failed")
            QMessageBox.critical(self, "Error", str(e))
            return

        self.moves_list.clear()
        self.lbl_info.setText("Moves: 0")
        self.status_message = ""
        self.btn_solve.setEnabled(True)
        self.btn_next.setEnabled(False)
        self.btn_play.setEnabled(False)

    def on_solve_clicked(self) -> None:
        # Only generate the plan, moves are executed step by step
        plan = self.controller.solve()

        self.moves_list.clear()
        self.moves_list.addItems([move.describe() for move in plan])
        self.lbl_info.setText(f"Total moves: {len(plan)}")
        self.status_message = ""
        self.btn_solve.setEnabled(False)
        self.btn_next.setEnabled(bool(plan))
        self.btn_play.setEnabled(bool(plan))

    def on_next_clicked(self) -> None:
        self.controller.next_move()

    def on_move_made(self, description: str, moves_made: int, total_moves: int) -> None:
        if total_moves:
            self.lbl_info.setText(f"Move {moves_made} of {total_moves}")
        else:
            self.lbl_info.setText(f"Moves: {moves_made}")
        if 0 < moves_made <= self.moves_list.count():
            self.moves_list.setCurrentRow(moves_made - 1)
        self.status_message = description

    def on_move_rejected(self, reason: str) -> None:
        self.lbl_status.setText(f"Move rejected: {reason}")
        self.lbl_status.setStyleSheet("color: red;")

    def on_solution_finished(self) -> None:
        self.btn_next.setEnabled(False)
        self.btn_play.setEnabled(False)
        self.btn_solve.setEnabled(True)
        QMessageBox.information(self, "Done", "Solution complete!")

    def on_animate_toggled(self, checked: bool) -> None:
        self.controller.set_animated(checked)
        self.spin_speed.setEnabled(checked)

    def on_speed_changed(self, value: int) -> None:
        self.controller.set_animation_step(min(1.0, value * SPEED_TO_STEP))

    def update_play_icon(self, playing: bool) -> None:
        if playing:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPause))
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
        self.btn_next.setEnabled(not playing and self.controller.session.peek() is not None)
