# gesture/camera.py
import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

import cv2

from config import (
    FRONT_CAM_INDEX_CANDIDATES, BACK_CAM_INDEX_CANDIDATES, CAP_BACKENDS,
    CAM_W, CAM_H, CAM_ROTATION_DEG, MIRROR_FRONT, MIRROR_BACK, CAM_READ_RETRY_SEC,
)
from gesture.errors import CaptureBindingFailure
from gesture.types import CameraSelector, Frame

logger = logging.getLogger(__name__)


def index_candidates(selector: CameraSelector) -> List[int]:
    if selector is CameraSelector.FRONT:
        return list(FRONT_CAM_INDEX_CANDIDATES)
    return list(BACK_CAM_INDEX_CANDIDATES)


def is_mirrored(selector: CameraSelector) -> bool:
    return MIRROR_FRONT if selector is CameraSelector.FRONT else MIRROR_BACK


def try_open_camera(selector: CameraSelector = CameraSelector.FRONT) -> Tuple[cv2.VideoCapture, str]:
    """
    依次尝试不同 index 与 backend，返回 cap 与描述信息；全部失败抛 CaptureBindingFailure
    """
    for idx in index_candidates(selector):
        for name, backend in CAP_BACKENDS:
            if name != "DEFAULT" and backend is None:
                continue
            if backend is None:
                cap = cv2.VideoCapture(idx)
            else:
                cap = cv2.VideoCapture(idx, backend)

            if cap is not None and cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAM_W)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAM_H)
                info = f"CAM {selector.value} idx={idx}, backend={name}"
                return cap, info

            if cap is not None:
                cap.release()

    raise CaptureBindingFailure(f"CAMERA_OPEN_FAILED ({selector.value})")


class CaptureSource(threading.Thread):
    """
    Reads frames from an opened capture at the sensor's rate and hands each one
    to `deliver`. Read failures are logged and the loop keeps waiting.
    """

    def __init__(self, cap, deliver: Callable[[Frame], None], mirrored: bool,
                 rotation_degrees: int = CAM_ROTATION_DEG,
                 retry_sec: float = CAM_READ_RETRY_SEC):
        super().__init__(daemon=True, name="CaptureSource")
        self.cap = cap
        self.deliver = deliver
        self.mirrored = mirrored
        self.rotation_degrees = rotation_degrees
        self.retry_sec = retry_sec
        self._stop_event = threading.Event()
        self.read_failures = 0

    def stop(self):
        self._stop_event.set()

    def run(self):
        try:
            while not self._stop_event.is_set():
                try:
                    ok, img = self.cap.read()
                except Exception as e:
                    # 部分后端读帧直接抛 cv2.error，按读失败处理
                    logger.warning("CAMERA_READ_EXCEPTION: %s", e)
                    ok, img = False, None
                if not ok or img is None:
                    self.read_failures += 1
                    if self.read_failures == 1 or self.read_failures % 100 == 0:
                        logger.warning("CAMERA_READ_FAILED (x%d)", self.read_failures)
                    time.sleep(self.retry_sec)
                    continue

                self.deliver(Frame(
                    image=img,
                    rotation_degrees=self.rotation_degrees,
                    is_mirrored=self.mirrored,
                    timestamp=time.monotonic(),
                ))
        finally:
            self.cap.release()


def open_capture(selector: CameraSelector, deliver: Callable[[Frame], None],
                 opener: Optional[Callable] = None) -> Tuple[CaptureSource, str]:
    opener = opener or try_open_camera
    cap, info = opener(selector)
    logger.info("Opened: %s", info)
    return CaptureSource(cap, deliver, mirrored=is_mirrored(selector)), info
