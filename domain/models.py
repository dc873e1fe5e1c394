from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import time

from domain.enums import DebounceState

# Type aliases
Landmark2D = Tuple[float, float]
LandmarkList = List[Landmark2D]
HandsData = Dict[str, LandmarkList]   # {"Left": [...], "Right": [...]}


@dataclass(frozen=True)
class RecognitionSnapshot:
    """
    Immutable view of the debouncer after one mutation.
    Published to every relay subscriber instead of the live object.
    """
    reading_label: str = ""
    confirmed_label: str = ""
    run_length: int = 0
    progress_pct: float = 0.0
    state: DebounceState = DebounceState.IDLE
    timestamp: float = field(default_factory=time.time)

    # ---- convenience accessors ----------------------------------------
    @property
    def is_complete(self) -> bool:
        """True once the progress ring is full."""
        return self.progress_pct >= 100.0

    @property
    def display_label(self) -> str:
        """Label a progress widget should show: the candidate until full, then the result."""
        return self.reading_label if not self.is_complete else self.confirmed_label
