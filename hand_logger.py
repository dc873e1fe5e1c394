import csv
from datetime import datetime

from utils.constants import LABEL_COLUMN
from utils.geometry import FEATURE_NAMES, extract_features


class HandLogger:
    """Appends one labelled feature row per frame to a CSV for training."""

    def __init__(self, filename="hand_features.csv"):
        self.file = open(filename, "w", newline="")
        self.writer = csv.writer(self.file)
        self.writer.writerow([LABEL_COLUMN, "frame", "time"] + FEATURE_NAMES)
        self.rows = 0

    # ========================
    # LOG
    # ========================
    def log(self, frame_id, label, hands_data):
        """hands_data: normalised landmarks keyed by "Left" / "Right"."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.writer.writerow([label, frame_id, timestamp] + extract_features(hands_data))
        self.rows += 1

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
