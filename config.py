# config.py
import cv2

# 摄像头：前置/后置各自尝试的索引（按顺序）
FRONT_CAM_INDEX_CANDIDATES = [0, 1, 2]
BACK_CAM_INDEX_CANDIDATES = [1, 2, 0]

# 摄像头后端：会按顺序尝试
CAP_BACKENDS = [
    ("DSHOW", getattr(cv2, "CAP_DSHOW", None)),
    ("MSMF", getattr(cv2, "CAP_MSMF", None)),
    ("DEFAULT", None),
]

CAM_W, CAM_H = 640, 480
CAM_ROTATION_DEG = 0          # 传感器方向校正（顺时针）
MIRROR_FRONT = True           # 前置摄像头画面左右镜像
MIRROR_BACK = False
CAM_READ_RETRY_SEC = 0.01

# MediaPipe Hands floors (fixed per session)
HAND_DETECTION_CONF = 0.7
HAND_TRACKING_CONF = 0.7
MAX_NUM_HANDS = 1
MODEL_COMPLEXITY = 1

# Classifier: below this score the result is "no match"
MATCH_DISPLAY_FLOOR = 60.0

# Typing policy
MIN_CONFIDENCE = 95.0
TYPING_COOLDOWN_SEC = 1.0

NO_SIGN_LABEL = "No sign detected"

# Window
WIN_W, WIN_H = 800, 600
FPS = 30
SHOW_PREVIEW = True

LOG_LEVEL = "INFO"
