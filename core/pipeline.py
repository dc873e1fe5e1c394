"""
RecognitionPipeline — admission gate + classifier + debouncer + relay.

    frame → AdmissionGate → classifier.classify() → ClassificationDebouncer
          → ConfirmationRelay.publish() → gate released

Two ways to drive it:
  - process(frame)  synchronous, runs in the caller's thread.
  - offer(frame)    asynchronous, the gate is taken in the caller (the
                    frame producer) and the classification runs on a
                    single worker thread that always gives it back.
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from core.admission_gate import AdmissionGate
from core.debouncer import ClassificationDebouncer, DEFAULT_THRESHOLD
from core.relay import ConfirmationRelay
from domain.enums import DebounceState

logger = logging.getLogger(__name__)


class LabelClassifier(Protocol):
    """Anything that turns a frame into a label, or None when no subject is visible."""

    def classify(self, frame: Any) -> Optional[str]:
        ...


@dataclass
class PipelineStats:
    offered: int = 0            # frames presented to the gate
    dropped: int = 0            # turned away while a classification was in flight
    processed: int = 0          # labels folded into the debouncer
    no_subject: int = 0         # frames that triggered the hard reset
    classifier_faults: int = 0  # classify() raised, frame discarded


class RecognitionPipeline:
    """
    Parameters
    ----------
    classifier : LabelClassifier
        External classification capability.
    threshold : int
        Debouncer threshold, ignored when ``debouncer`` is given.
    debouncer, relay, gate :
        Injected collaborators (fresh ones are created otherwise).
    """

    def __init__(
        self,
        classifier: LabelClassifier,
        threshold: int = DEFAULT_THRESHOLD,
        debouncer: Optional[ClassificationDebouncer] = None,
        relay: Optional[ConfirmationRelay] = None,
        gate: Optional[AdmissionGate] = None,
    ) -> None:
        self._classifier = classifier
        self._debouncer = debouncer or ClassificationDebouncer(threshold)
        self._relay = relay or ConfirmationRelay()
        self._gate = gate or AdmissionGate()
        self._stats = PipelineStats()
        self._stats_lock = threading.Lock()
        self._last_state = self._debouncer.state
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------
    # Synchronous mode
    # ------------------------------------------------------------------
    def process(self, frame: Any) -> bool:
        """
        Classify ``frame`` in the calling thread.

        Returns False when the frame was dropped because another
        classification was still in flight.
        """
        self._count("offered")
        with self._gate.admit() as admitted:
            if not admitted:
                self._count("dropped")
                return False
            self._complete(frame)
        return True

    # ------------------------------------------------------------------
    # Asynchronous mode
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._executor is not None:
            return
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="classifier")
        logger.info("[STATE] pipeline started (threshold=%d)", self._debouncer.threshold)

    def offer(self, frame: Any) -> bool:
        """
        Hand ``frame`` to the worker if nothing is in flight. Never blocks.

        Returns False when the frame was dropped (busy, or not started).
        """
        executor = self._executor
        if executor is None:
            return False
        self._count("offered")
        if not self._gate.try_acquire():
            self._count("dropped")
            return False
        try:
            executor.submit(self._run_admitted, frame)
        except BaseException:
            # Never submitted: nobody else will give the permit back.
            self._gate.release()
            raise
        return True

    def stop(self) -> None:
        """Wait for the in-flight classification, then shut the worker down."""
        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
            logger.info("[STATE] pipeline stopped %s", self._stats)

    def _run_admitted(self, frame: Any) -> None:
        try:
            self._complete(frame)
        except Exception:
            logger.exception("[ERROR] unexpected failure while folding a frame")
        finally:
            self._gate.release()

    # ------------------------------------------------------------------
    # Shared completion path (gate held by the caller)
    # ------------------------------------------------------------------
    def _complete(self, frame: Any) -> None:
        try:
            label = self._classifier.classify(frame)
        except Exception:
            self._count("classifier_faults")
            logger.warning("[WARN] classifier failed, frame discarded", exc_info=True)
            return

        if label:
            self._count("processed")
            if self._debouncer.on_label(label):
                logger.info("[CONFIRMED] %s", label)
        else:
            self._count("no_subject")
            self._debouncer.on_detection_failure()

        self._publish()

    def reset(self) -> None:
        """
        External hard reset, same effect as a frame without a subject.
        Waits for the in-flight classification so the debouncer keeps a
        single writer.

        Must not be called from a relay listener: listeners run while the
        frame being completed still holds the gate, so ``hold()`` would
        wait on itself forever. Call it from the UI or producer thread.
        """
        with self._gate.hold():
            self._debouncer.on_detection_failure()
            self._publish()

    def _publish(self) -> None:
        snapshot = self._debouncer.snapshot()
        if snapshot.state != self._last_state:
            logger.info("[STATE] %s → %s", self._last_state.value, snapshot.state.value)
            self._last_state = snapshot.state
        self._relay.publish(snapshot)

    def _count(self, field_name: str) -> None:
        with self._stats_lock:
            setattr(self._stats, field_name, getattr(self._stats, field_name) + 1)

    # ------------------------------------------------------------------
    @property
    def relay(self) -> ConfirmationRelay:
        return self._relay

    @property
    def debouncer(self) -> ClassificationDebouncer:
        return self._debouncer

    @property
    def gate(self) -> AdmissionGate:
        return self._gate

    @property
    def stats(self) -> PipelineStats:
        with self._stats_lock:
            return PipelineStats(**vars(self._stats))

    @property
    def state(self) -> DebounceState:
        return self._debouncer.state

    def __enter__(self) -> "RecognitionPipeline":
        self.start()
        return self

    def __exit__(self, *_) -> None:
        self.stop()
