import unittest
import sys
import os
import time

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.pipeline import RecognitionPipeline
from domain.enums import DebounceState
from game.controller import TicTacToeController, attach
from tests.fakes import BlockingClassifier, FakeEngine, ScriptedClassifier


class TestSynchronousPipeline(unittest.TestCase):
    def test_labels_flow_into_debouncer_and_relay(self):
        pipeline = RecognitionPipeline(ScriptedClassifier(["4"] * 5), threshold=2)
        confirmed = []
        snapshots = []
        pipeline.relay.subscribe(snapshots.append)
        pipeline.relay.subscribe_confirmed(confirmed.append)

        for frame in range(5):
            self.assertTrue(pipeline.process(frame))

        self.assertEqual(confirmed, ["4"])
        self.assertEqual(len(snapshots), 5)
        self.assertEqual(pipeline.relay.latest.confirmed_label, "4")
        self.assertEqual(pipeline.state, DebounceState.CONFIRMED)
        self.assertFalse(pipeline.gate.busy)
        self.assertEqual(pipeline.stats.processed, 5)

    def test_no_subject_hard_resets(self):
        pipeline = RecognitionPipeline(ScriptedClassifier(["4"] * 5 + [None]), threshold=2)
        for frame in range(6):
            pipeline.process(frame)

        latest = pipeline.relay.latest
        self.assertEqual(latest.reading_label, "")
        self.assertEqual(latest.confirmed_label, "")
        self.assertEqual(latest.progress_pct, 0.0)
        self.assertEqual(pipeline.stats.no_subject, 1)
        self.assertFalse(pipeline.gate.busy)

    def test_empty_label_counts_as_no_subject(self):
        pipeline = RecognitionPipeline(ScriptedClassifier(["4", "4", ""]), threshold=2)
        for frame in range(3):
            pipeline.process(frame)
        self.assertEqual(pipeline.debouncer.reading_label, "")
        self.assertEqual(pipeline.stats.no_subject, 1)

    def test_classifier_fault_is_contained(self):
        script = ["4", "4", ValueError("malformed frame"), "4"]
        pipeline = RecognitionPipeline(ScriptedClassifier(script), threshold=5)
        published = []
        pipeline.relay.subscribe(published.append)

        pipeline.process(0)
        pipeline.process(1)
        with self.assertLogs("core.pipeline", level="WARNING"):
            self.assertTrue(pipeline.process(2))
        # No mutation, no publish for the failed frame
        self.assertEqual(pipeline.debouncer.run_length, 1)
        self.assertEqual(len(published), 2)
        self.assertFalse(pipeline.gate.busy)

        pipeline.process(3)
        self.assertEqual(pipeline.debouncer.run_length, 2)
        self.assertEqual(pipeline.stats.classifier_faults, 1)

    def test_frame_dropped_while_gate_held(self):
        classifier = ScriptedClassifier(["4"])
        pipeline = RecognitionPipeline(classifier)
        self.assertTrue(pipeline.gate.try_acquire())

        self.assertFalse(pipeline.process("frame"))
        self.assertEqual(classifier.calls, 0)
        self.assertEqual(pipeline.stats.dropped, 1)
        pipeline.gate.release()

    def test_reset_clears_state(self):
        pipeline = RecognitionPipeline(ScriptedClassifier(["4"] * 5), threshold=2)
        for frame in range(5):
            pipeline.process(frame)
        pipeline.reset()
        self.assertEqual(pipeline.relay.latest.confirmed_label, "")
        self.assertEqual(pipeline.state, DebounceState.IDLE)
        self.assertFalse(pipeline.gate.busy)

    def test_listeners_run_while_gate_is_held(self):
        pipeline = RecognitionPipeline(ScriptedClassifier(["4"] * 5), threshold=2)
        seen = []
        pipeline.relay.subscribe(lambda snapshot: seen.append(pipeline.gate.busy))
        pipeline.relay.subscribe_confirmed(lambda label: seen.append(pipeline.gate.busy))

        for frame in range(5):
            pipeline.process(frame)

        # five snapshots plus one confirmation
        self.assertEqual(seen, [True] * 6)
        self.assertFalse(pipeline.gate.busy)

    def test_confirmations_drive_the_game_once(self):
        engine = FakeEngine()
        controller = TicTacToeController(engine, scheduler=lambda delay, fn: fn())
        pipeline = RecognitionPipeline(ScriptedClassifier(["5"] * 40), threshold=2)
        attach(controller, pipeline.relay)

        for frame in range(40):
            pipeline.process(frame)

        # One human move on 5 and one AI reply, no repeats
        self.assertEqual(engine.cells.count("X"), 1)
        self.assertEqual(engine.cells[4], "X")
        self.assertEqual(engine.cells.count("O"), 1)
        self.assertEqual(controller.message, "Your move")


class TestAsynchronousPipeline(unittest.TestCase):
    def test_offer_drops_frames_while_classifying(self):
        classifier = BlockingClassifier(label="3")
        pipeline = RecognitionPipeline(classifier, threshold=2)
        pipeline.start()
        try:
            self.assertTrue(pipeline.offer("f1"))
            self.assertTrue(classifier.started.wait(2))
            self.assertTrue(pipeline.gate.busy)

            self.assertFalse(pipeline.offer("f2"))
            self.assertFalse(pipeline.offer("f3"))

            classifier.proceed.set()
        finally:
            pipeline.stop()

        self.assertFalse(pipeline.gate.busy)
        self.assertEqual(classifier.calls, 1)
        stats = pipeline.stats
        self.assertEqual(stats.offered, 3)
        self.assertEqual(stats.dropped, 2)
        self.assertEqual(stats.processed, 1)
        self.assertEqual(pipeline.relay.latest.reading_label, "3")

    def test_gate_released_after_async_fault(self):
        classifier = BlockingClassifier(error=RuntimeError("model crashed"))
        classifier.proceed.set()
        pipeline = RecognitionPipeline(classifier)
        with self.assertLogs("core.pipeline", level="WARNING"):
            with pipeline:
                self.assertTrue(pipeline.offer("f1"))
        self.assertFalse(pipeline.gate.busy)
        self.assertEqual(pipeline.stats.classifier_faults, 1)
        self.assertEqual(pipeline.relay.latest.reading_label, "")

    def test_offer_before_start_is_dropped(self):
        classifier = ScriptedClassifier(["3"])
        pipeline = RecognitionPipeline(classifier)
        self.assertFalse(pipeline.offer("f1"))
        self.assertEqual(classifier.calls, 0)
        self.assertFalse(pipeline.gate.busy)

    def test_sequential_offers_accumulate(self):
        classifier = BlockingClassifier(label="8")
        classifier.proceed.set()
        pipeline = RecognitionPipeline(classifier, threshold=2)
        confirmed = []
        pipeline.relay.subscribe_confirmed(confirmed.append)

        with pipeline:
            admitted = 0
            while admitted < 5:
                if pipeline.offer(admitted):
                    admitted += 1
                else:
                    time.sleep(0.001)

        self.assertEqual(confirmed, ["8"])
        self.assertFalse(pipeline.gate.busy)


if __name__ == '__main__':
    unittest.main()
