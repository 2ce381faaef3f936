# gesture/typer.py
import threading
from dataclasses import dataclass, replace
from typing import Optional

from config import MIN_CONFIDENCE, TYPING_COOLDOWN_SEC, NO_SIGN_LABEL
from gesture.types import ClassificationEvent, EventKind, TypingState


def format_label(symbol: str, confidence: float) -> str:
    return f"{symbol} ({confidence:.2f}%)"


@dataclass(frozen=True)
class TypingDecision:
    label: str
    text: str
    appended: Optional[str] = None


class DebouncedTyper:
    """
    Turns per-frame classification events into single-symbol appends.

    The displayed label always follows the latest classification; appending
    is gated by:
      - confidence >= min_confidence
      - debounce: after an append, nothing more is typed until the cooldown
        has elapsed, unless the hand left the frame in between (NO_HAND
        releases the suppression immediately)
    A NO_MATCH event (hand present, unreadable) changes only the label.
    """

    def __init__(self, min_confidence: float = MIN_CONFIDENCE,
                 cooldown_sec: float = TYPING_COOLDOWN_SEC):
        self.min_confidence = min_confidence
        self.cooldown_sec = cooldown_sec
        self.state = TypingState(label=NO_SIGN_LABEL)
        self.lock = threading.Lock()

    def snapshot(self) -> TypingState:
        with self.lock:
            return replace(self.state)

    def apply(self, event: ClassificationEvent) -> TypingDecision:
        with self.lock:
            st = self.state
            appended = None

            if event.kind is EventKind.NO_HAND:
                st.last_appended_symbol = None
                st.label = NO_SIGN_LABEL
            elif event.kind is EventKind.NO_MATCH:
                st.label = NO_SIGN_LABEL
            else:
                symbol, confidence = event.result.symbol, event.result.confidence
                st.label = format_label(symbol, confidence)
                if confidence >= self.min_confidence and self._gate_open(event.timestamp):
                    st.accumulated_text += symbol
                    st.last_appended_symbol = symbol
                    st.last_appended_at = event.timestamp
                    appended = symbol

            return TypingDecision(st.label, st.accumulated_text, appended)

    def _gate_open(self, now: float) -> bool:
        st = self.state
        if st.last_appended_symbol is None or st.last_appended_at is None:
            return True
        return now - st.last_appended_at > self.cooldown_sec

    def clear(self) -> TypingDecision:
        with self.lock:
            self.state.accumulated_text = ""
            self.state.last_appended_symbol = None
            self.state.last_appended_at = None
            return TypingDecision(self.state.label, "")
