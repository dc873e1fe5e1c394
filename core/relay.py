"""
ConfirmationRelay — fans debouncer snapshots out to downstream consumers
(game controller, UI).

Two kinds of subscription:
  - subscribe()            every published snapshot (live feedback).
  - subscribe_confirmed()  once per distinct non-empty confirmed label,
                           so a consumer never double-processes the same
                           confirmation.
"""
from __future__ import annotations
import logging
import threading
from typing import Callable, List

from domain.models import RecognitionSnapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[RecognitionSnapshot], None]
ConfirmedListener = Callable[[str], None]


class ConfirmationRelay:
    """
    Publishes snapshots and remembers the latest one for pollers.

    ``publish`` runs the listeners synchronously in the caller's thread
    (the classification completion context). ``latest`` may be read
    from any thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = RecognitionSnapshot()
        self._listeners: List[SnapshotListener] = []
        self._confirmed_listeners: List[ConfirmedListener] = []
        self._dispatched = ""   # last confirmed label handed to consumers

    # ------------------------------------------------------------------
    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener. Returns a callable that removes it."""
        with self._lock:
            self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_confirmed(self, listener: ConfirmedListener) -> Callable[[], None]:
        """Register a confirmation listener. Returns a callable that removes it."""
        with self._lock:
            self._confirmed_listeners.append(listener)
        return lambda: self._remove(self._confirmed_listeners, listener)

    def _remove(self, listeners: list, listener) -> None:
        with self._lock:
            if listener in listeners:
                listeners.remove(listener)

    # ------------------------------------------------------------------
    def publish(self, snapshot: RecognitionSnapshot) -> None:
        with self._lock:
            self._latest = snapshot
            listeners = list(self._listeners)
            confirmed_listeners = list(self._confirmed_listeners)
            fire = bool(snapshot.confirmed_label) and snapshot.confirmed_label != self._dispatched
            self._dispatched = snapshot.confirmed_label

        for listener in listeners:
            self._notify(listener, snapshot)

        if fire:
            logger.info("[EVENT] confirmed %r", snapshot.confirmed_label)
            for listener in confirmed_listeners:
                self._notify(listener, snapshot.confirmed_label)

    @staticmethod
    def _notify(listener: Callable, value) -> None:
        try:
            listener(value)
        except Exception:
            logger.exception("[ERROR] relay listener %r failed", listener)

    # ------------------------------------------------------------------
    @property
    def latest(self) -> RecognitionSnapshot:
        with self._lock:
            return self._latest
