# gesture/landmarker.py
import logging
from typing import Callable

import cv2
import mediapipe as mp

from config import (
    HAND_DETECTION_CONF, HAND_TRACKING_CONF, MAX_NUM_HANDS, MODEL_COMPLEXITY,
)
from gesture.errors import InferenceFailure
from gesture.types import Frame, HandSkeleton, LandmarkerResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[LandmarkerResult], None]


class MediaPipeHandLandmarker:
    """
    Hand landmark extraction with MediaPipe Hands (video mode).

    detect() delivers its result through `on_result`; callers must not assume
    the callback runs on their own thread. Every hand MediaPipe returns is
    reported; the handedness score is left/right certainty, not presence.
    """

    def __init__(self,
                 min_detection_confidence: float = HAND_DETECTION_CONF,
                 min_tracking_confidence: float = HAND_TRACKING_CONF,
                 max_num_hands: int = MAX_NUM_HANDS):
        self.hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=MODEL_COMPLEXITY,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    def detect(self, frame: Frame, on_result: ResultCallback):
        try:
            rgb = cv2.cvtColor(frame.image, cv2.COLOR_BGR2RGB)
            rgb.flags.writeable = False
            result = self.hands.process(rgb)

            skeletons = []
            if result.multi_hand_landmarks:
                handedness = result.multi_handedness or []
                for i, hand_landmarks in enumerate(result.multi_hand_landmarks):
                    label, score = "", 1.0
                    if i < len(handedness):
                        c = handedness[i].classification[0]
                        label, score = c.label, float(c.score)
                    points = tuple((lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark)
                    skeletons.append(HandSkeleton(points=points, handedness=label, score=score))
        except Exception as e:
            raise InferenceFailure(str(e)) from e

        on_result(LandmarkerResult(tuple(skeletons)))

    def close(self):
        self.hands.close()
