"""
GameEngine — the contract a turn-based engine (e.g. a minimax tic-tac-toe
library) must satisfy to be driven by confirmed hand counts.

The engine itself lives outside this project; ``load_engine`` plugs one
in from a "module:attribute" reference in the configuration.
"""
from __future__ import annotations
import importlib
from typing import Optional, Protocol, runtime_checkable

from domain.enums import GameStatus, Player


class InvalidMoveError(Exception):
    """The requested cell is occupied, out of range, or the game is over."""


@runtime_checkable
class GameEngine(Protocol):

    @property
    def status(self) -> GameStatus:
        ...

    def reset_board(self) -> None:
        ...

    def play_move(self, cell: int, player: Player) -> None:
        """Place ``player`` on ``cell``; raise InvalidMoveError when illegal."""
        ...

    def find_best_move(self) -> Optional[int]:
        """Best cell for the AI, None when the board is full."""
        ...

    def board_string(self) -> str:
        """Board as rows of "-", "X" and "O"."""
        ...


def load_engine(reference: str) -> GameEngine:
    """
    Build an engine from ``"package.module:factory"``.

    ``factory`` may be a class or any zero-argument callable.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Engine reference must look like 'module:attr', got {reference!r}")

    module = importlib.import_module(module_name)
    try:
        factory = getattr(module, attr)
    except AttributeError as exc:
        raise ValueError(f"{module_name!r} has no attribute {attr!r}") from exc

    engine = factory()
    if not isinstance(engine, GameEngine):
        raise TypeError(f"{reference!r} did not produce a GameEngine: {engine!r}")
    return engine
