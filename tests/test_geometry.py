import unittest
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.geometry import FEATURE_NAMES, angle, dist, extract_features, hand_features, normalise


def straight_hand():
    """21 points on a vertical line, wrist at (10, 10)."""
    return [(10.0, 10.0 + i) for i in range(21)]


class TestGeometry(unittest.TestCase):
    def test_dist(self):
        self.assertAlmostEqual(dist((0, 0), (3, 4)), 5.0)

    def test_angle(self):
        self.assertAlmostEqual(angle((1, 0), (0, 0), (0, 1)), 90.0)
        self.assertAlmostEqual(angle((-1, 0), (0, 0), (1, 0)), 180.0)
        self.assertEqual(angle((0, 0), (0, 0), (1, 1)), 0.0)

    def test_normalise_moves_wrist_to_origin_and_scales(self):
        norm = normalise(straight_hand())
        self.assertEqual(norm[0], (0.0, 0.0))
        # wrist → middle MCP (landmark 9) becomes unit length
        self.assertAlmostEqual(dist(norm[0], norm[9]), 1.0)

    def test_feature_names_layout(self):
        self.assertEqual(len(FEATURE_NAMES), 20)
        self.assertEqual(FEATURE_NAMES[0], "left_THUMB_dist")
        self.assertEqual(FEATURE_NAMES[5], "left_THUMB_angle")
        self.assertEqual(FEATURE_NAMES[10], "right_THUMB_dist")
        self.assertEqual(FEATURE_NAMES[19], "right_PINKY_angle")

    def test_missing_hand_is_zero_filled(self):
        row = extract_features({"Right": straight_hand()})
        self.assertEqual(len(row), len(FEATURE_NAMES))
        self.assertEqual(row[:10], [0.0] * 10)
        self.assertTrue(any(v != 0.0 for v in row[10:]))

    def test_straight_fingers_have_flat_angles(self):
        features = hand_features(straight_hand())
        for a in features[5:]:
            self.assertAlmostEqual(a, 180.0)


if __name__ == '__main__':
    unittest.main()
