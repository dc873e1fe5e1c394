"""
TicTacToeController — turns confirmed hand counts into game moves.

Design decisions:
  - Reacts to confirmation *events* (ConfirmationRelay.subscribe_confirmed),
    never to polled state, so one confirmation is one move.
  - The reset label restarts the game; every other integer label is a cell.
  - The AI answers after a short delay on a timer thread so the player can
    see their own move land first.
"""
from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional

from domain.enums import GameStatus, Player
from game.engine import GameEngine, InvalidMoveError
from utils.constants import AI_MOVE_DELAY, RESET_LABEL

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], None]
ChangeListener = Callable[[str, str], None]   # (message, board)

_BOARD_SYMBOLS = {"-": "⬛️", "O": "0️⃣", "X": "❎"}


def timer_scheduler(delay: float, fn: Callable[[], None]) -> None:
    """Run ``fn`` after ``delay`` seconds on a daemon timer (immediately if delay <= 0)."""
    if delay <= 0:
        fn()
        return
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()


class TicTacToeController:
    """
    Parameters
    ----------
    engine : GameEngine
        External engine that owns the board and the minimax search.
    reset_label : str
        Confirmed label that starts a new game.
    ai_delay : float
        Seconds between the human move and the AI reply.
    scheduler : callable
        ``scheduler(delay, fn)``; injected in tests to run synchronously.
    """

    def __init__(
        self,
        engine: GameEngine,
        reset_label: str = RESET_LABEL,
        ai_delay: float = AI_MOVE_DELAY,
        scheduler: Scheduler = timer_scheduler,
    ) -> None:
        self._engine = engine
        self._reset_label = reset_label
        self._ai_delay = ai_delay
        self._schedule = scheduler
        self._lock = threading.RLock()
        self._message = "Your move"
        self._ai_pending = False
        self._game = 0
        self._listeners: List[ChangeListener] = []

    # ------------------------------------------------------------------
    def on_confirmed(self, label: str) -> None:
        """Relay callback: map one confirmed label to a game action."""
        if label == self._reset_label:
            self.reset_game()
            return
        try:
            cell = int(label)
        except ValueError:
            logger.debug("ignoring non-numeric label %r", label)
            return
        self.human_move(cell)

    def reset_game(self) -> None:
        with self._lock:
            self._engine.reset_board()
            self._game += 1
            self._ai_pending = False
            self._set_message("New Game")

    def human_move(self, cell: int) -> None:
        with self._lock:
            if self._ai_pending:
                logger.info("[EVENT] move %d ignored, AI is thinking", cell)
                return
            try:
                self._engine.play_move(cell, Player.HUMAN)
            except InvalidMoveError as exc:
                logger.info("[EVENT] invalid move %d: %s", cell, exc)
                self._set_message("Invalid move!")
                return
            logger.info("[EVENT] human → %d", cell)
            self._ai_pending = True
            self._set_message("AI thinking ...")
            game = self._game
        self._schedule(self._ai_delay, lambda: self._ai_move(game))

    def _ai_move(self, game: int) -> None:
        with self._lock:
            if game != self._game or not self._ai_pending:
                return  # scheduled by a game that has since been reset
            self._ai_pending = False

            best = self._engine.find_best_move()
            if best is None:
                self._set_message(self._engine.status.value)
                return
            try:
                self._engine.play_move(best, Player.AI)
            except InvalidMoveError:
                logger.error("[ERROR] engine proposed an illegal move: %r", best)
                self._set_message("Error finding move for AI!")
                return
            logger.info("[EVENT] ai → %d", best)
            status = self._engine.status
            self._set_message("Your move" if status == GameStatus.PLAYING else status.value)

    # ------------------------------------------------------------------
    def subscribe(self, listener: ChangeListener) -> None:
        """``listener(message, board)`` on every message change."""
        self._listeners.append(listener)

    def _set_message(self, message: str) -> None:
        self._message = message
        board = self.board_string
        for listener in list(self._listeners):
            try:
                listener(message, board)
            except Exception:
                logger.exception("[ERROR] game listener %r failed", listener)

    @property
    def message(self) -> str:
        return self._message

    @property
    def raw_board(self) -> str:
        """Board exactly as the engine prints it."""
        with self._lock:
            return self._engine.board_string()

    @property
    def board_string(self) -> str:
        """Board with ⬛️ for empty, ❎ for X and 0️⃣ for O."""
        return "".join(_BOARD_SYMBOLS.get(ch, ch) for ch in self.raw_board)

    @property
    def ai_pending(self) -> bool:
        return self._ai_pending


def attach(controller: TicTacToeController, relay) -> Callable[[], None]:
    """Wire ``controller`` to a ConfirmationRelay. Returns the unsubscribe callable."""
    return relay.subscribe_confirmed(controller.on_confirmed)
