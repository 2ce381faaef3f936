# gesture/types.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np


class CameraSelector(Enum):
    FRONT = "front"
    BACK = "back"

    def toggled(self) -> "CameraSelector":
        return CameraSelector.BACK if self is CameraSelector.FRONT else CameraSelector.FRONT


@dataclass(frozen=True, eq=False)
class Frame:
    image: np.ndarray
    rotation_degrees: int = 0
    is_mirrored: bool = False    # 前置摄像头：画面左右翻转
    timestamp: float = 0.0
    on_release: Optional[Callable[["Frame"], None]] = field(default=None, repr=False, compare=False)

    def release(self):
        """交还给采集端；每个周期必须调用一次（成功/失败/丢弃都要）"""
        if self.on_release is not None:
            self.on_release(self)


Point = Tuple[float, float, float]


@dataclass(frozen=True)
class HandSkeleton:
    points: Tuple[Point, ...]    # 21 landmarks, normalized x/y, relative z
    handedness: str = ""
    score: float = 1.0


@dataclass(frozen=True)
class LandmarkerResult:
    skeletons: Tuple[HandSkeleton, ...] = ()


@dataclass(frozen=True)
class ClassificationResult:
    symbol: str
    confidence: float            # 0..100


class EventKind(Enum):
    NO_HAND = "no_hand"
    NO_MATCH = "no_match"
    CANDIDATE = "candidate"


@dataclass(frozen=True)
class ClassificationEvent:
    kind: EventKind
    timestamp: float
    result: Optional[ClassificationResult] = None
    binding: int = 0

    @classmethod
    def no_hand(cls, timestamp: float, binding: int = 0) -> "ClassificationEvent":
        return cls(EventKind.NO_HAND, timestamp, binding=binding)

    @classmethod
    def no_match(cls, timestamp: float, binding: int = 0) -> "ClassificationEvent":
        return cls(EventKind.NO_MATCH, timestamp, binding=binding)

    @classmethod
    def candidate(cls, symbol: str, confidence: float, timestamp: float,
                  binding: int = 0) -> "ClassificationEvent":
        return cls(EventKind.CANDIDATE, timestamp, ClassificationResult(symbol, confidence), binding)


@dataclass
class TypingState:
    accumulated_text: str = ""
    last_appended_symbol: Optional[str] = None
    last_appended_at: Optional[float] = None    # None: never / reset
    label: str = ""
