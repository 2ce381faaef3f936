# gesture/session.py
import logging
import queue
from typing import Callable, Optional, Protocol

from gesture.camera import open_capture
from gesture.classifier import SignClassifier
from gesture.errors import CaptureBindingFailure
from gesture.pipeline import FrameIngestionPipeline
from gesture.typer import DebouncedTyper, TypingDecision
from gesture.types import CameraSelector, ClassificationEvent

logger = logging.getLogger(__name__)


class PresentationSink(Protocol):
    def update_label(self, label: str) -> None: ...

    def update_text(self, text: str) -> None: ...

    def show_error(self, message: str) -> None: ...


class SignTypingSession:
    """
    Owns one capture binding (capture thread + ingestion worker) and the
    typing state.

    Worker threads only put ClassificationEvents on `events`; poll(), called
    from the presentation loop, is the single place where they are applied.
    Switching camera tears the binding down and builds a new one; events left
    over from the old binding are discarded.
    """

    def __init__(self, sink: PresentationSink, landmarker,
                 classifier=None,
                 typer: Optional[DebouncedTyper] = None,
                 selector: CameraSelector = CameraSelector.FRONT,
                 capture_opener: Callable = open_capture):
        self.sink = sink
        self.landmarker = landmarker
        self.classifier = classifier or SignClassifier()
        self.typer = typer or DebouncedTyper()
        self.selector = selector
        self.capture_opener = capture_opener

        self.events: "queue.Queue[ClassificationEvent]" = queue.Queue()
        self.binding = 0
        self.pipeline: Optional[FrameIngestionPipeline] = None
        self.capture = None
        self.cam_info = ""
        self.binding_error: Optional[str] = None
        self._error_reported = True

    # --- binding lifecycle ---
    def start(self):
        self._bind()

    def _bind(self):
        self.binding += 1
        pipeline = FrameIngestionPipeline(
            self.landmarker, self.classifier, self.events.put, binding=self.binding)
        try:
            capture, info = self.capture_opener(self.selector, pipeline.submit)
        except CaptureBindingFailure as e:
            logger.error("CaptureBindingFailure: %s", e)
            self.binding_error = str(e)
            self._error_reported = False
            self.cam_info = str(e)
            return

        self.binding_error = None
        self.cam_info = info
        self.pipeline = pipeline
        self.capture = capture
        pipeline.start()
        capture.start()

    def _unbind(self):
        if self.capture is not None:
            self.capture.stop()
            self.capture.join()
            self.capture = None
        if self.pipeline is not None:
            self.pipeline.stop()
            logger.info("binding %d closed: %d processed, %d dropped",
                        self.binding, self.pipeline.processed_frames,
                        self.pipeline.dropped_frames)
            self.pipeline = None

    def toggle_camera_selector(self) -> CameraSelector:
        self._unbind()
        self.selector = self.selector.toggled()
        logger.info("switching camera to %s", self.selector.value)
        self._bind()
        return self.selector

    def close(self):
        self._unbind()
        close = getattr(self.landmarker, "close", None)
        if close is not None:
            close()

    # --- presentation side ---
    def clear(self):
        decision = self.typer.clear()
        self.sink.update_text(decision.text)

    def poll(self, max_events: Optional[int] = None) -> int:
        """Apply pending classification events; returns how many were applied."""
        if not self._error_reported:
            self._error_reported = True
            self.sink.show_error(self.binding_error)

        applied = 0
        while max_events is None or applied < max_events:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                break
            if event.binding != self.binding:
                continue
            self._render(self.typer.apply(event))
            applied += 1
        return applied

    def _render(self, decision: TypingDecision):
        self.sink.update_label(decision.label)
        self.sink.update_text(decision.text)
        if decision.appended:
            logger.info("typed %r -> %r", decision.appended, decision.text)

    def preview(self):
        return self.pipeline.last_image if self.pipeline is not None else None
