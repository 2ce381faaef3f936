# gesture/classifier.py
from typing import Dict, Optional, Tuple

from config import MATCH_DISPLAY_FLOOR
from gesture.types import ClassificationResult, HandSkeleton
from gesture.utils import FINGERS, NUM_LANDMARKS, finger_extension

# 手指状态模板：(thumb, index, middle, ring, pinky)，1 = 伸直
SIGN_TEMPLATES: Dict[str, Tuple[int, int, int, int, int]] = {
    "A": (1, 0, 0, 0, 0),
    "B": (0, 1, 1, 1, 1),
    "D": (0, 1, 0, 0, 0),
    "I": (0, 0, 0, 0, 1),
    "L": (1, 1, 0, 0, 0),
    "S": (0, 0, 0, 0, 0),
    "V": (0, 1, 1, 0, 0),
    "W": (0, 1, 1, 1, 0),
    "Y": (1, 0, 0, 0, 1),
}


class SignClassifier:
    """
    Matches finger extension against fixed letter templates.

    classify() is pure and stateless: it returns the best template with a
    0..100 confidence, or None when nothing reaches the display floor.
    """

    def __init__(self, templates: Optional[Dict[str, Tuple[int, ...]]] = None,
                 display_floor: float = MATCH_DISPLAY_FLOOR):
        self.templates = dict(templates or SIGN_TEMPLATES)
        self.display_floor = display_floor

    def score(self, ext: Dict[str, float], template: Tuple[int, ...]) -> float:
        agree = [ext[f] if want else 1.0 - ext[f] for f, want in zip(FINGERS, template)]
        return 100.0 * sum(agree) / len(agree)

    def classify(self, skeleton: HandSkeleton) -> Optional[ClassificationResult]:
        if len(skeleton.points) < NUM_LANDMARKS:
            return None

        ext = finger_extension(skeleton)
        best_symbol, best_score = "", -1.0
        for symbol, template in self.templates.items():
            s = self.score(ext, template)
            if s > best_score:
                best_symbol, best_score = symbol, s

        if best_score < self.display_floor:
            return None
        return ClassificationResult(best_symbol, round(best_score, 2))
