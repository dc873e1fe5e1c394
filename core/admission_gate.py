"""
AdmissionGate — single-slot flag guaranteeing at most one classification
in flight.

Frames that arrive while the gate is held are dropped, never queued:
only the eventual stable signal matters, so discarding frames bounds
both memory and latency.
"""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator


class GateReleaseError(RuntimeError):
    """release() called without a matching successful try_acquire()."""


class AdmissionGate:
    """
    Non-blocking single permit.

    The permit may be taken in one thread (the frame producer) and
    returned from another (the classification completion), which is why
    this wraps a plain ``threading.Lock`` rather than an ``RLock``.

    Usage
    -----
    gate = AdmissionGate()
    with gate.admit() as admitted:
        if not admitted:
            return          # frame dropped
        ...                 # classify, gate released on every exit
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._admitted = 0
        self._rejected = 0

    # ------------------------------------------------------------------
    def try_acquire(self) -> bool:
        """Take the permit if free. Never waits."""
        acquired = self._lock.acquire(blocking=False)
        with self._stats_lock:
            if acquired:
                self._admitted += 1
            else:
                self._rejected += 1
        return acquired

    def release(self) -> None:
        """Return the permit. Must pair with exactly one successful try_acquire()."""
        try:
            self._lock.release()
        except RuntimeError as exc:
            raise GateReleaseError("release() called on a gate that is not held") from exc

    @contextmanager
    def admit(self) -> Iterator[bool]:
        """
        Scoped acquisition.

        Yields True with the permit held and releases it when the block
        exits, including exits by exception. Yields False (and releases
        nothing) when the gate is busy.
        """
        if not self.try_acquire():
            yield False
            return
        try:
            yield True
        finally:
            self.release()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """
        Blocking scoped acquisition for control operations (e.g. an
        external reset) that must wait for the in-flight frame instead
        of being dropped. Not counted in the admission statistics.
        """
        self._lock.acquire()
        try:
            yield
        finally:
            self.release()

    # ------------------------------------------------------------------
    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def admitted(self) -> int:
        """Number of successful acquisitions so far."""
        return self._admitted

    @property
    def rejected(self) -> int:
        """Number of frames turned away because the gate was busy."""
        return self._rejected

    def __repr__(self) -> str:
        return (
            f"<AdmissionGate busy={self.busy} "
            f"admitted={self._admitted} rejected={self._rejected}>"
        )
