"""
GameWindow — ventana que muestra el feed de la cámara, el anillo de
progreso del conteo y el tablero del juego.

Todos los slots se llaman desde el hilo de la UI vía señales Qt.
"""
from __future__ import annotations

import cv2
import numpy as np
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QImage, QPixmap, QColor, QPainter, QPen, QFont
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QTextEdit, QSizePolicy, QFrame,
)

from domain.models import RecognitionSnapshot


class GameWindow(QWidget):
    """
    Ventana principal.

    Características:
    - Feed de cámara (espejado).
    - Anillo de progreso: lectura actual mientras < 100 %, número
      confirmado en verde al completarse.
    - Tablero y mensaje del juego.
    - Log de eventos en tiempo real.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._setup_ui()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------
    def _setup_ui(self) -> None:
        self.setWindowTitle("Hand Count — Tic-tac-toe")
        self.setMinimumSize(900, 540)
        self.setStyleSheet("""
            QWidget {
                background-color: #000000;
                color: #e0e0e0;
                font-family: 'Segoe UI', Consolas, monospace;
            }
            QLabel#message {
                font-size: 26px;
                padding: 6px 0;
            }
            QLabel#board {
                font-size: 54px;
                font-weight: bold;
            }
            QTextEdit#log {
                background-color: #111;
                color: #7ec8a0;
                font-size: 11px;
                border: 1px solid #333;
                border-radius: 4px;
            }
            QPushButton {
                background-color: #2C2C33;
                color: #a0c4ff;
                border: 1px solid #334;
                border-radius: 5px;
                padding: 6px 14px;
                font-size: 12px;
            }
        """)

        root = QHBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(10)

        # ---- LEFT: cámara --------------------------------------------
        self._camera_label = QLabel("No Camera Feed")
        self._camera_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._camera_label.setMinimumSize(620, 420)
        self._camera_label.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding
        )
        root.addWidget(self._camera_label, stretch=3)

        # ---- RIGHT: juego + progreso + log ---------------------------
        right = QVBoxLayout()
        right.setSpacing(8)

        self._message_label = QLabel("")
        self._message_label.setObjectName("message")
        right.addWidget(self._message_label)

        self._board_label = QLabel("")
        self._board_label.setObjectName("board")
        right.addWidget(self._board_label)

        self._ring = _ProgressRing()
        right.addWidget(self._ring, alignment=Qt.AlignmentFlag.AlignHCenter)

        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.HLine)
        right.addWidget(sep)

        right.addWidget(QLabel("Console log"))
        self._log = QTextEdit()
        self._log.setObjectName("log")
        self._log.setReadOnly(True)
        self._log.setMaximumHeight(160)
        right.addWidget(self._log)

        right.addStretch()

        self.reset_btn = QPushButton("New game")
        right.addWidget(self.reset_btn)

        root.addLayout(right, stretch=1)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def on_frame(self, frame: np.ndarray) -> None:
        """Recibe un frame BGR y lo muestra espejado."""
        frame_rgb = cv2.flip(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), 1)
        h, w, ch = frame_rgb.shape
        img = QImage(frame_rgb.data, w, h, ch * w, QImage.Format.Format_RGB888)
        pix = QPixmap.fromImage(img).scaled(
            self._camera_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._camera_label.setPixmap(pix)

    def on_snapshot(self, snapshot: RecognitionSnapshot) -> None:
        self._ring.set_snapshot(snapshot)

    def on_game_changed(self, message: str, board: str) -> None:
        self._message_label.setText(message)
        self._board_label.setText(board)

    def on_status(self, msg: str) -> None:
        """Mensajes de sistema/debug al log."""
        if msg.startswith("[EVENT]") or msg.startswith("[STATE]"):
            self._log.append(f"<span style='color:#6699cc'>{msg}</span>")
        elif msg.startswith("[ERROR]") or msg.startswith("[WARN]"):
            self._log.append(f"<span style='color:#ff6b6b'>{msg}</span>")
        else:
            self._log.append(f"<span style='color:#555'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())


# ---- Widget auxiliar: anillo de progreso ------------------------------

class _ProgressRing(QWidget):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._snapshot = RecognitionSnapshot()
        self.setFixedSize(200, 200)

    def set_snapshot(self, snapshot: RecognitionSnapshot) -> None:
        self._snapshot = snapshot
        self.update()

    def paintEvent(self, _) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        snap = self._snapshot
        rect = QRectF(15, 15, self.width() - 30, self.height() - 30)

        if not snap.is_complete:
            pen = QPen(QColor(255, 255, 255, 50))
            pen.setWidth(14)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            p.setPen(pen)
            # Qt: ángulos en 1/16 de grado, antihorario desde las 3 en punto
            p.drawArc(rect, 90 * 16, int(-360 * 16 * snap.progress_pct / 100.0))

        text = snap.display_label
        if text:
            color = QColor(80, 220, 80) if snap.is_complete else QColor(255, 255, 255, 90)
            p.setPen(color)
            font = QFont()
            font.setPointSize(48)
            font.setBold(True)
            p.setFont(font)
            p.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)
        p.end()
