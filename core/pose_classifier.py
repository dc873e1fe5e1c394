"""
HandPoseClassifier — wraps the trained counting model.
No buffer, no debouncing — just frame in, label out.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import joblib
import pandas as pd

from core.hand_tracker import HandTracker
from utils.geometry import FEATURE_NAMES, extract_features


class HandPoseClassifier:
    """
    Turns a camera frame into a count label ("1".."10").

    Parameters
    ----------
    model_path : Path
        Path to the serialised scikit-learn classifier (.pkl).
    tracker : HandTracker
        Landmark source; its absence of hands means "no subject".
    """

    def __init__(self, model_path: Path, tracker: HandTracker) -> None:
        if not Path(model_path).exists():
            raise FileNotFoundError(f"Classifier model not found: {model_path}")
        self._model = joblib.load(model_path)
        if hasattr(self._model, "verbose"):
            self._model.verbose = 0
        self._tracker = tracker

    def classify(self, frame: Any) -> Optional[str]:
        """Label for ``frame``, or None when no hand is visible."""
        hands_data = self._tracker.process(frame)
        if not hands_data:
            return None
        X = pd.DataFrame([extract_features(hands_data)], columns=FEATURE_NAMES)
        return str(self._model.predict(X)[0])

    def predict(self, hands_data: Dict[str, List]) -> Tuple[str, float]:
        """
        Parameters
        ----------
        hands_data : dict
            Normalised landmark lists keyed by "Left" / "Right".

        Returns
        -------
        (label, confidence)
        """
        X = pd.DataFrame([extract_features(hands_data)], columns=FEATURE_NAMES)
        proba = self._model.predict_proba(X)[0]
        best = int(proba.argmax())
        return str(self._model.classes_[best]), float(proba[best])
