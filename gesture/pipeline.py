# gesture/pipeline.py
import logging
import threading
import time
from typing import Callable, Optional, Sequence

from gesture.errors import InferenceFailure, InvalidFrame
from gesture.preprocess import preprocess
from gesture.types import ClassificationEvent, Frame, HandSkeleton, LandmarkerResult

logger = logging.getLogger(__name__)

# 等待推理回调时检查 stop 的间隔
INFLIGHT_POLL_SEC = 0.05


class LatestFrameSlot:
    """
    Capacity-one slot with overwrite semantics: put() replaces whatever frame
    is waiting and hands the displaced one back to the caller.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._frame: Optional[Frame] = None
        self._closed = False

    def put(self, frame: Frame) -> Optional[Frame]:
        with self._cond:
            if self._closed:
                return frame
            displaced, self._frame = self._frame, frame
            self._cond.notify()
            return displaced

    def take(self) -> Optional[Frame]:
        """Block until a frame is available; None once closed."""
        with self._cond:
            while self._frame is None and not self._closed:
                self._cond.wait()
            if self._closed:
                return None
            frame, self._frame = self._frame, None
            return frame

    def close(self) -> Optional[Frame]:
        with self._cond:
            self._closed = True
            pending, self._frame = self._frame, None
            self._cond.notify_all()
            return pending

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed


class _Abandoned(Exception):
    pass


class FrameIngestionPipeline(threading.Thread):
    """
    Single sequential worker fed through a LatestFrameSlot.

    Each cycle: preprocess -> landmarker -> classifier (first hand only) ->
    emit(ClassificationEvent). At most one inference is in flight; frames
    that arrive meanwhile overwrite each other in the slot and the losers are
    released without being processed.
    """

    def __init__(self, landmarker, classifier,
                 emit: Callable[[ClassificationEvent], None],
                 binding: int = 0,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__(daemon=True, name=f"FrameIngestionPipeline-{binding}")
        self.landmarker = landmarker
        self.classifier = classifier
        self.emit = emit
        self.binding = binding
        self.clock = clock

        self.slot = LatestFrameSlot()
        self._stopping = threading.Event()
        self._inflight_lock = threading.Lock()
        self._inflight_token = None

        self.dropped_frames = 0
        self.processed_frames = 0
        self.last_image = None

    def submit(self, frame: Frame):
        displaced = self.slot.put(frame)
        if displaced is None:
            return
        displaced.release()
        if displaced is not frame:
            self.dropped_frames += 1
            logger.debug("dropped stale frame (total %d)", self.dropped_frames)

    def stop(self, timeout: Optional[float] = None):
        """Stop accepting frames, drop the pending one and wait for the worker."""
        self._stopping.set()
        pending = self.slot.close()
        if pending is not None:
            pending.release()
        if self.is_alive():
            self.join(timeout)

    def run(self):
        while True:
            frame = self.slot.take()
            if frame is None:
                break
            self._process(frame)
        logger.debug("worker %d drained", self.binding)

    def _process(self, frame: Frame):
        try:
            try:
                ready = preprocess(frame, frame.rotation_degrees, frame.is_mirrored)
            except InvalidFrame as e:
                logger.warning("InvalidFrame: %s", e)
                return
            self.last_image = ready.image
            self.processed_frames += 1

            try:
                skeletons = self._extract(ready)
            except _Abandoned:
                logger.debug("in-flight inference abandoned on stop")
                return
            except InferenceFailure as e:
                logger.error("InferenceFailure: %s", e)
                self.emit(ClassificationEvent.no_hand(self.clock(), self.binding))
                return

            if not skeletons:
                self.emit(ClassificationEvent.no_hand(self.clock(), self.binding))
                return

            result = self.classifier.classify(skeletons[0])
            now = self.clock()
            if result is None:
                self.emit(ClassificationEvent.no_match(now, self.binding))
            else:
                self.emit(ClassificationEvent.candidate(
                    result.symbol, result.confidence, now, self.binding))
        except Exception:
            logger.exception("frame cycle failed")
        finally:
            frame.release()

    def _extract(self, frame: Frame) -> Sequence[HandSkeleton]:
        done = threading.Event()
        box = {}
        token = object()

        def on_result(result: LandmarkerResult):
            with self._inflight_lock:
                if self._inflight_token is not token:
                    return  # 已放弃的推理，结果丢掉
                box["result"] = result
            done.set()

        with self._inflight_lock:
            self._inflight_token = token
        try:
            try:
                self.landmarker.detect(frame, on_result)
            except InferenceFailure:
                raise
            except Exception as e:
                # 任何后端异常都按推理失败处理（视为无手）
                raise InferenceFailure(f"{type(e).__name__}: {e}") from e
            while not done.wait(INFLIGHT_POLL_SEC):
                if self._stopping.is_set():
                    raise _Abandoned()
        finally:
            with self._inflight_lock:
                self._inflight_token = None

        return box["result"].skeletons
