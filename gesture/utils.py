# gesture/utils.py
from typing import Dict, Sequence

import numpy as np

from gesture.types import HandSkeleton

# MediaPipe Hands landmark indices
WRIST = 0
THUMB_TIP = 4
INDEX_MCP, INDEX_PIP, INDEX_TIP = 5, 6, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_TIP = 9, 10, 12
RING_PIP, RING_TIP = 14, 16
PINKY_PIP, PINKY_TIP = 18, 20

NUM_LANDMARKS = 21

FINGERS = ("thumb", "index", "middle", "ring", "pinky")

_TIP_PIP = {
    "index": (INDEX_TIP, INDEX_PIP),
    "middle": (MIDDLE_TIP, MIDDLE_PIP),
    "ring": (RING_TIP, RING_PIP),
    "pinky": (PINKY_TIP, PINKY_PIP),
}

# tip/pip distance-to-wrist ratio: <= LO curled, >= HI straight
FINGER_RATIO_LO, FINGER_RATIO_HI = 1.0, 1.25
# thumb tip to index MCP, normalized by hand size
THUMB_SEP_LO, THUMB_SEP_HI = 0.35, 0.6


def lm_xy(points: Sequence, i: int) -> np.ndarray:
    return np.array([points[i][0], points[i][1]], dtype=np.float32)


def dist(a, b) -> float:
    return float(np.linalg.norm(a - b))


def _ramp(v: float, lo: float, hi: float) -> float:
    return float(np.clip((v - lo) / (hi - lo), 0.0, 1.0))


def estimate_hand_size(points: Sequence) -> float:
    return max(1e-6, dist(lm_xy(points, WRIST), lm_xy(points, MIDDLE_MCP)))


def finger_extension(skeleton: HandSkeleton) -> Dict[str, float]:
    """
    每根手指的伸直程度 0..1（到手腕距离之比，和手的朝向无关）
    """
    pts = skeleton.points
    wrist = lm_xy(pts, WRIST)
    ext = {}
    for name, (tip, pip) in _TIP_PIP.items():
        tip_d = dist(lm_xy(pts, tip), wrist)
        pip_d = max(1e-6, dist(lm_xy(pts, pip), wrist))
        ext[name] = _ramp(tip_d / pip_d, FINGER_RATIO_LO, FINGER_RATIO_HI)

    sep = dist(lm_xy(pts, THUMB_TIP), lm_xy(pts, INDEX_MCP)) / estimate_hand_size(pts)
    ext["thumb"] = _ramp(sep, THUMB_SEP_LO, THUMB_SEP_HI)
    return ext
