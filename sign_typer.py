import argparse
import logging

from config import MIN_CONFIDENCE, TYPING_COOLDOWN_SEC, LOG_LEVEL, SHOW_PREVIEW
from gesture.landmarker import MediaPipeHandLandmarker
from gesture.session import SignTypingSession
from gesture.typer import DebouncedTyper
from gesture.types import CameraSelector
from ui.typing_screen import TypingScreen, run_app


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Type text with hand signs from a webcam.")
    p.add_argument("--camera", choices=[s.value for s in CameraSelector], default=CameraSelector.FRONT.value)
    p.add_argument("--min-confidence", type=float, default=MIN_CONFIDENCE)
    p.add_argument("--cooldown", type=float, default=TYPING_COOLDOWN_SEC, help="seconds")
    p.add_argument("--no-preview", action="store_true")
    p.add_argument("--log-level", default=LOG_LEVEL)
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(threadName)s] %(name)s %(levelname)s: %(message)s",
    )

    sink = TypingScreen()
    session = SignTypingSession(
        sink,
        MediaPipeHandLandmarker(),
        typer=DebouncedTyper(args.min_confidence, args.cooldown),
        selector=CameraSelector(args.camera),
    )
    run_app(session, sink, show_preview=SHOW_PREVIEW and not args.no_preview)


if __name__ == "__main__":
    main()
