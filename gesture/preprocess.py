# gesture/preprocess.py
from dataclasses import replace

import cv2
import numpy as np

from gesture.errors import InvalidFrame
from gesture.types import Frame

_RIGHT_ANGLES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def rotate_image(img: np.ndarray, degrees: float) -> np.ndarray:
    """
    顺时针旋转；90 的倍数走 cv2.rotate（无插值），其他角度扩展画布避免裁剪
    """
    deg = degrees % 360
    if deg == 0:
        return img
    if deg in _RIGHT_ANGLES:
        return cv2.rotate(img, _RIGHT_ANGLES[deg])

    h, w = img.shape[:2]
    cx, cy = w / 2.0, h / 2.0
    # cv2 的正角度是逆时针
    m = cv2.getRotationMatrix2D((cx, cy), -deg, 1.0)
    cos, sin = abs(m[0, 0]), abs(m[0, 1])
    new_w = int(round(h * sin + w * cos))
    new_h = int(round(h * cos + w * sin))
    m[0, 2] += new_w / 2.0 - cx
    m[1, 2] += new_h / 2.0 - cy
    return cv2.warpAffine(img, m, (new_w, new_h), flags=cv2.INTER_LINEAR)


def preprocess(frame: Frame, rotation_degrees: float, is_mirrored: bool) -> Frame:
    """Rotate to upright, then mirror about the vertical axis if requested."""
    img = frame.image
    if img is None or not isinstance(img, np.ndarray) or img.ndim < 2 or img.size == 0:
        raise InvalidFrame("empty frame")
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise InvalidFrame(f"zero-sized frame {img.shape}")

    out = rotate_image(img, rotation_degrees)
    if is_mirrored:
        out = cv2.flip(out, 1)

    return replace(frame, image=out, rotation_degrees=0, is_mirrored=False)
