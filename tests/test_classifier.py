"""
Test cases for the finger-template sign classifier, using synthetic skeletons.
"""
import math
import unittest

from gesture.classifier import SIGN_TEMPLATES, SignClassifier
from gesture.types import HandSkeleton
from gesture.utils import finger_extension

FINGER_X = {"index": 0.45, "middle": 0.5, "ring": 0.55, "pinky": 0.6}


def synthetic_hand(thumb, index, middle, ring, pinky):
    """Upright hand, wrist at the bottom; 1 = straight finger, 0 = curled."""
    pts = [None] * 21
    pts[0] = (0.5, 0.9, 0.0)
    pts[1] = (0.44, 0.85, 0.0)
    pts[2] = (0.40, 0.80, 0.0)
    if thumb:
        pts[3], pts[4] = (0.32, 0.74, 0.0), (0.25, 0.70, 0.0)
    else:
        pts[3], pts[4] = (0.42, 0.74, 0.0), (0.47, 0.72, 0.0)

    for base, (name, up) in zip((5, 9, 13, 17),
                                (("index", index), ("middle", middle),
                                 ("ring", ring), ("pinky", pinky))):
        x = FINGER_X[name]
        ys = (0.7, 0.6, 0.55, 0.5) if up else (0.7, 0.62, 0.68, 0.74)
        for k, y in enumerate(ys):
            pts[base + k] = (x, y, 0.0)
    return HandSkeleton(points=tuple(pts))


def rotated(skeleton, degrees):
    cx, cy = skeleton.points[0][:2]
    a = math.radians(degrees)
    out = []
    for x, y, z in skeleton.points:
        dx, dy = x - cx, y - cy
        out.append((cx + dx * math.cos(a) - dy * math.sin(a),
                    cy + dx * math.sin(a) + dy * math.cos(a), z))
    return HandSkeleton(points=tuple(out))


class TestFingerExtension(unittest.TestCase):

    def test_open_hand(self):
        ext = finger_extension(synthetic_hand(1, 1, 1, 1, 1))
        for name, v in ext.items():
            self.assertAlmostEqual(v, 1.0, msg=name)

    def test_fist(self):
        ext = finger_extension(synthetic_hand(0, 0, 0, 0, 0))
        for name, v in ext.items():
            self.assertAlmostEqual(v, 0.0, msg=name)


class TestSignClassifier(unittest.TestCase):

    def setUp(self):
        self.clf = SignClassifier()

    def test_every_template_is_recognized(self):
        for symbol, template in SIGN_TEMPLATES.items():
            result = self.clf.classify(synthetic_hand(*template))
            self.assertIsNotNone(result, symbol)
            self.assertEqual(result.symbol, symbol)
            self.assertAlmostEqual(result.confidence, 100.0)

    def test_orientation_does_not_matter(self):
        hand = synthetic_hand(*SIGN_TEMPLATES["L"])
        for deg in (30, 90, 180):
            self.assertEqual(self.clf.classify(rotated(hand, deg)).symbol, "L")

    def test_confidence_is_a_percentage(self):
        result = self.clf.classify(synthetic_hand(1, 1, 1, 1, 1))
        # open hand is not a template: nearest is B with the thumb wrong
        self.assertEqual(result.symbol, "B")
        self.assertAlmostEqual(result.confidence, 80.0)

    def test_score_partial_agreement(self):
        ext = {"thumb": 0.0, "index": 1.0, "middle": 0.5, "ring": 0.0, "pinky": 0.0}
        self.assertAlmostEqual(self.clf.score(ext, SIGN_TEMPLATES["V"]), 90.0)
        self.assertAlmostEqual(self.clf.score(ext, SIGN_TEMPLATES["D"]), 90.0)

    def test_below_display_floor_is_no_match(self):
        clf = SignClassifier(display_floor=85.0)
        self.assertIsNone(clf.classify(synthetic_hand(1, 1, 1, 1, 1)))

    def test_incomplete_skeleton_is_no_match(self):
        short = HandSkeleton(points=synthetic_hand(0, 1, 0, 0, 0).points[:10])
        self.assertIsNone(self.clf.classify(short))

    def test_custom_templates(self):
        clf = SignClassifier(templates={"OPEN": (1, 1, 1, 1, 1)})
        result = clf.classify(synthetic_hand(1, 1, 1, 1, 1))
        self.assertEqual(result.symbol, "OPEN")


if __name__ == '__main__':
    unittest.main()
