import unittest
import sys
import os
import tempfile
from pathlib import Path

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import joblib
import pandas as pd
from sklearn.ensemble import RandomForestClassifier

from core.pose_classifier import HandPoseClassifier
from utils.geometry import FEATURE_NAMES, extract_features


def straight_hand():
    return [(10.0, 10.0 + i) for i in range(21)]


def zigzag_hand():
    return [(10.0 + (i % 2) * 3, 10.0 + i) for i in range(21)]


class StubTracker:
    """Returns the queued hands_data for each frame."""

    def __init__(self, *results):
        self._results = list(results)
        self.frames = []

    def process(self, frame):
        self.frames.append(frame)
        return self._results.pop(0)


class TestHandPoseClassifier(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.model_path = Path(self._tmp.name) / "count.pkl"
        rows = [
            extract_features({"Right": straight_hand()}),
            extract_features({"Right": zigzag_hand()}),
        ]
        X = pd.DataFrame(rows * 2, columns=FEATURE_NAMES)
        y = ["5", "2"] * 2
        model = RandomForestClassifier(n_estimators=5, bootstrap=False, random_state=0)
        model.fit(X, y)
        joblib.dump(model, self.model_path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_no_hand_returns_none(self):
        tracker = StubTracker({})
        clf = HandPoseClassifier(self.model_path, tracker)
        self.assertIsNone(clf.classify("frame-1"))
        self.assertEqual(tracker.frames, ["frame-1"])

    def test_classify_returns_label(self):
        tracker = StubTracker({"Right": straight_hand()}, {"Right": zigzag_hand()})
        clf = HandPoseClassifier(self.model_path, tracker)
        self.assertEqual(clf.classify("a"), "5")
        self.assertEqual(clf.classify("b"), "2")

    def test_predict_gives_label_and_confidence(self):
        clf = HandPoseClassifier(self.model_path, StubTracker())
        label, confidence = clf.predict({"Right": zigzag_hand()})
        self.assertEqual(label, "2")
        self.assertAlmostEqual(confidence, 1.0)

    def test_missing_model(self):
        with self.assertRaises(FileNotFoundError):
            HandPoseClassifier(Path(self._tmp.name) / "missing.pkl", StubTracker())


if __name__ == '__main__':
    unittest.main()
