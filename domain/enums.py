from enum import Enum


class DebounceState(str, Enum):
    """Where the debouncer currently sits in its accumulate/confirm cycle."""
    IDLE         = "IDLE"           # no reading in progress
    ACCUMULATING = "ACCUMULATING"   # counting frames for a new candidate
    CONFIRMED    = "CONFIRMED"      # current reading already promoted


class Player(str, Enum):
    """Sides of a turn-based game driven by confirmed labels."""
    HUMAN = "X"
    AI    = "O"


class GameStatus(str, Enum):
    """Outcome reported by a game engine after each move."""
    PLAYING   = "Playing"
    HUMAN_WON = "You win!"
    AI_WON    = "AI wins!"
    DRAW      = "Draw"
