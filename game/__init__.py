"""
Consumidores de etiquetas confirmadas: juego por turnos.
"""

from .engine import GameEngine, InvalidMoveError, load_engine
from .controller import TicTacToeController, attach, timer_scheduler

__all__ = [
    'GameEngine',
    'InvalidMoveError',
    'load_engine',
    'TicTacToeController',
    'attach',
    'timer_scheduler',
]
