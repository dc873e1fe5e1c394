"""
OpenCVUI — all rendering logic isolated from recognition and game logic.

The pipeline never calls cv2 drawing functions directly — it delegates to this class.
"""
from __future__ import annotations
from typing import Any, Optional

import cv2

from app.config import AppConfig
from domain.models import RecognitionSnapshot

_RING_COLOR     = (200, 200, 200)
_READING_COLOR  = (220, 220, 220)
_CONFIRM_COLOR  = (80, 220, 80)
_TEXT_COLOR     = (255, 255, 255)


class OpenCVUI:
    """Renders the progress ring and game overlay onto the frame and shows it."""

    def __init__(self, config: AppConfig, window_name: str = "Hand Count") -> None:
        self._cfg  = config
        self._name = window_name

    def render(
        self,
        frame: Any,
        snapshot: RecognitionSnapshot,
        message: Optional[str] = None,
        board: Optional[str] = None,
    ) -> None:
        """Flip frame, draw overlays, show window."""
        frame = cv2.flip(frame, 1)
        h, w = frame.shape[:2]

        self._draw_progress(frame, snapshot, center=(w - 110, h - 110), radius=80)

        if message is not None:
            cv2.putText(frame, message, (20, 50),
                        cv2.FONT_HERSHEY_SIMPLEX, 1.0, _TEXT_COLOR, 2)
        if board is not None:
            self._draw_board(frame, board, origin=(20, 80), cell=50)
            cv2.putText(frame, f"Show {self._cfg.reset_label} to restart", (20, 250),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, _TEXT_COLOR, 1)

        cv2.putText(frame, "ESC to quit",
                    (20, h - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.6, _TEXT_COLOR, 1)

        cv2.imshow(self._name, frame)

    # ------------------------------------------------------------------
    @staticmethod
    def _draw_progress(frame: Any, snapshot: RecognitionSnapshot, center, radius: int) -> None:
        """Ring filled clockwise from 12 o'clock; reading label inside, confirmed label once full."""
        sweep = 360.0 * snapshot.progress_pct / 100.0
        if not snapshot.is_complete:
            cv2.circle(frame, center, radius, (60, 60, 60), 2)
            if sweep > 0:
                cv2.ellipse(frame, center, (radius, radius), -90, 0, sweep, _RING_COLOR, 12)

        text = snapshot.display_label
        if text:
            color = _CONFIRM_COLOR if snapshot.is_complete else _READING_COLOR
            scale = 2.5 if len(text) < 2 else 1.8
            (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, scale, 4)
            cv2.putText(frame, text, (center[0] - tw // 2, center[1] + th // 2),
                        cv2.FONT_HERSHEY_DUPLEX, scale, color, 4)

    @staticmethod
    def _draw_board(frame: Any, board: str, origin, cell: int) -> None:
        """Board as ASCII ("-", "X", "O"); emoji do not render through putText."""
        symbols = [ch for ch in board if ch in "-XO"]
        x0, y0 = origin
        for i, ch in enumerate(symbols[:9]):
            row, col = divmod(i, 3)
            x, y = x0 + col * cell, y0 + row * cell
            cv2.rectangle(frame, (x, y), (x + cell - 4, y + cell - 4), (80, 80, 80), 2)
            if ch != "-":
                cv2.putText(frame, ch, (x + 10, y + cell - 14),
                            cv2.FONT_HERSHEY_SIMPLEX, 1.1, _TEXT_COLOR, 3)

    def should_quit(self) -> bool:
        """Returns True if the user pressed ESC."""
        return (cv2.waitKey(1) & 0xFF) == 27

    def close(self) -> None:
        cv2.destroyAllWindows()
