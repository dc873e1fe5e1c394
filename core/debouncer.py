"""
ClassificationDebouncer — temporal filter that turns noisy per-frame
labels into a stable, confirmed label.

Each successfully classified frame feeds one label. A label is promoted
to ``confirmed_label`` only after it has been read on an uninterrupted
run of frames whose count exceeds ``threshold``. A frame without a
detectable subject wipes everything, including a previous confirmation.
"""
from __future__ import annotations

from domain.enums import DebounceState
from domain.models import RecognitionSnapshot

DEFAULT_THRESHOLD = 30


class ClassificationDebouncer:
    """
    Run-length debouncer with a sticky confirmation.

    Parameters
    ----------
    threshold : int
        Run length that must be *exceeded* before a reading is promoted.
        With the default of 30 an uninterrupted label is confirmed on its
        33rd consecutive frame: the first frame only adopts the label,
        the next 31 grow the run to 31, the following one promotes.

    Not thread-safe. The admission gate guarantees a single caller.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold <= 0:
            raise ValueError(f"threshold must be a positive integer, got {threshold!r}")
        self._threshold = threshold
        self._reading = ""
        self._confirmed = ""
        self._run_length = 0
        self._progress = 0.0

    # ------------------------------------------------------------------
    def on_label(self, label: str) -> bool:
        """
        Feed the label classified for one frame.

        Returns True only on the frame where ``label`` gets promoted.
        """
        if not label:
            raise ValueError("label must be a non-empty string")

        if label != self._reading:
            # New candidate: the adopting frame itself does not count.
            self._reading = label
            self._set_run_length(0)
            return False

        if label == self._confirmed:
            return False

        if self._run_length > self._threshold:
            self._confirmed = label
            self._set_run_length(self._threshold)
            return True

        self._set_run_length(self._run_length + 1)
        return False

    def on_detection_failure(self) -> None:
        """Hard reset: no subject in the frame, forget the run and the confirmation."""
        self._reading = ""
        self._confirmed = ""
        self._set_run_length(0)

    def _set_run_length(self, value: int) -> None:
        self._run_length = value
        self._progress = min(100.0, value / self._threshold * 100.0)

    # ------------------------------------------------------------------
    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def reading_label(self) -> str:
        """Label of the run in progress ("" when idle)."""
        return self._reading

    @property
    def confirmed_label(self) -> str:
        """Last promoted label ("" when nothing is confirmed)."""
        return self._confirmed

    @property
    def run_length(self) -> int:
        return self._run_length

    @property
    def progress_pct(self) -> float:
        """``run_length / threshold`` as a percentage, clamped to [0, 100]."""
        return self._progress

    @property
    def state(self) -> DebounceState:
        if not self._reading:
            return DebounceState.IDLE
        if self._reading == self._confirmed:
            return DebounceState.CONFIRMED
        return DebounceState.ACCUMULATING

    def snapshot(self) -> RecognitionSnapshot:
        return RecognitionSnapshot(
            reading_label=self._reading,
            confirmed_label=self._confirmed,
            run_length=self._run_length,
            progress_pct=self._progress,
            state=self.state,
        )

    def __repr__(self) -> str:
        return (
            f"<ClassificationDebouncer reading={self._reading!r} "
            f"confirmed={self._confirmed!r} run={self._run_length}/{self._threshold}>"
        )
