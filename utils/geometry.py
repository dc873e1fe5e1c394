"""
Pure geometric utility functions and the hand feature vector.
No imports from the rest of the project (besides constants) — safe to use anywhere.
"""
from __future__ import annotations
import math
from typing import Dict, List, Optional, Sequence, Tuple

from utils.constants import FINGERS, HAND_SIDES, NUM_LANDMARKS

Point2D = Tuple[float, float]


def dist(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def angle(a: Point2D, b: Point2D, c: Point2D) -> float:
    """
    Angle ABC in degrees (vertex at B).
    Returns 0.0 if any segment has zero length.
    """
    ba = (a[0] - b[0], a[1] - b[1])
    bc = (c[0] - b[0], c[1] - b[1])
    dot = ba[0] * bc[0] + ba[1] * bc[1]
    mag_ba = math.hypot(*ba)
    mag_bc = math.hypot(*bc)
    if mag_ba * mag_bc == 0:
        return 0.0
    cos_val = max(-1.0, min(1.0, dot / (mag_ba * mag_bc)))
    return math.degrees(math.acos(cos_val))


def normalise(landmarks: Sequence[Point2D]) -> List[Point2D]:
    """
    Translate so the wrist is the origin, then scale so that the
    wrist→middle-MCP distance equals 1.
    """
    x0, y0 = landmarks[0]
    centered = [(x - x0, y - y0) for x, y in landmarks]
    sx, sy = centered[9]
    scale = math.hypot(sx, sy)
    if scale < 1e-6:
        scale = 1.0
    return [(x / scale, y / scale) for x, y in centered]


# ---- feature vector --------------------------------------------------------
# Column order: left dists, left angles, right dists, right angles.
FEATURE_NAMES: List[str] = [
    f"{side.lower()}_{finger}_{kind}"
    for side in HAND_SIDES
    for kind in ("dist", "angle")
    for finger in FINGERS
]


def hand_features(landmarks: Optional[Sequence[Point2D]]) -> List[float]:
    """Wrist→tip distances followed by MCP-PIP-TIP angles, zeros for a missing hand."""
    if not landmarks or len(landmarks) < NUM_LANDMARKS:
        return [0.0] * (2 * len(FINGERS))
    wrist = landmarks[0]
    dists = [dist(wrist, landmarks[tip]) for _, _, tip in FINGERS.values()]
    angles = [angle(landmarks[mcp], landmarks[pip], landmarks[tip])
              for mcp, pip, tip in FINGERS.values()]
    return dists + angles


def extract_features(hands_data: Dict[str, Sequence[Point2D]]) -> List[float]:
    """Feature row for one frame, matching FEATURE_NAMES."""
    row: List[float] = []
    for side in HAND_SIDES:
        row.extend(hand_features(hands_data.get(side)))
    return row
