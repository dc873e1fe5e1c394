"""
qt_app.py — PyQt6 entry point.

Conecta CameraWorker (hilo) ↔ GameWindow (UI) ↔ TicTacToeController a
través de señales Qt. El controlador recibe cada etiqueta confirmada una
sola vez y responde desde un timer, así que sus cambios se reenvían a la
UI con una señal propia.
"""
from __future__ import annotations
import sys
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QApplication

from app.camera_window import GameWindow
from app.camera_worker import CameraWorker
from app.config import AppConfig, setup_logging
from app.main import build_controller
from game.controller import TicTacToeController
from game.engine import GameEngine


class _GameBridge(QObject):
    """Lleva los cambios del controlador (hilo del timer) al hilo de la UI."""

    changed = pyqtSignal(str, str)   # message, board


class GameApp:
    def __init__(self, config: AppConfig, engine: Optional[GameEngine] = None) -> None:
        self._config = config
        self._window = GameWindow()
        self._worker = CameraWorker(config)
        self._controller: Optional[TicTacToeController] = build_controller(config, engine)
        self._bridge = _GameBridge()

        self._worker.frame_ready.connect(self._window.on_frame)
        self._worker.snapshot_changed.connect(self._window.on_snapshot)
        self._worker.status_msg.connect(self._window.on_status)

        if self._controller is not None:
            self._bridge.changed.connect(self._window.on_game_changed)
            self._controller.subscribe(self._bridge.changed.emit)
            self._worker.label_confirmed.connect(self._controller.on_confirmed)
            self._window.reset_btn.clicked.connect(self._new_game)
            self._window.on_game_changed(self._controller.message, self._controller.board_string)
        else:
            self._window.reset_btn.setEnabled(False)
            self._window.on_status("[STATE] Modo conteo (sin motor de juego)")

    def _new_game(self) -> None:
        self._worker.reset_recognition()
        self._controller.reset_game()

    def start(self) -> None:
        self._window.show()
        self._worker.start()

    def stop(self) -> None:
        self._worker.stop()


def main(argv=None) -> int:
    config = AppConfig.from_env()
    setup_logging(config.log_level)

    qt_app = QApplication(sys.argv if argv is None else argv)
    app = GameApp(config)
    qt_app.aboutToQuit.connect(app.stop)
    app.start()
    return qt_app.exec()


if __name__ == "__main__":
    sys.exit(main())
