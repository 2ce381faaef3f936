"""
Test cases for the debounced typing state machine.
"""
import unittest

from gesture.typer import DebouncedTyper, format_label
from gesture.types import ClassificationEvent


def cand(symbol, confidence, t):
    return ClassificationEvent.candidate(symbol, confidence, t)


class TestTypingScenarios(unittest.TestCase):

    def setUp(self):
        self.typer = DebouncedTyper(min_confidence=95.0, cooldown_sec=1.0)

    def test_same_symbol_repeats_only_after_cooldown(self):
        self.assertEqual(self.typer.apply(cand("A", 96, 0.0)).text, "A")
        self.assertEqual(self.typer.apply(cand("A", 96, 0.5)).text, "A")
        self.assertEqual(self.typer.apply(cand("A", 96, 1.2)).text, "AA")

    def test_no_hand_releases_suppression_early(self):
        self.typer.apply(cand("A", 96, 0.0))
        self.typer.apply(ClassificationEvent.no_hand(0.1))
        d = self.typer.apply(cand("A", 96, 0.2))
        self.assertEqual(d.text, "AA")
        self.assertEqual(d.appended, "A")

    def test_low_confidence_never_types(self):
        d = self.typer.apply(cand("A", 90, 0.0))
        self.assertEqual(d.text, "")
        self.assertIsNone(d.appended)
        for t in (2.0, 4.0, 6.0):
            self.assertEqual(self.typer.apply(cand("B", 94.99, t)).text, "")

    def test_confidence_at_threshold_types(self):
        self.assertEqual(self.typer.apply(cand("L", 95.0, 0.0)).text, "L")

    def test_cooldown_boundary_is_exclusive(self):
        self.typer.apply(cand("A", 99, 10.0))
        self.assertEqual(self.typer.apply(cand("A", 99, 11.0)).text, "A")
        self.assertEqual(self.typer.apply(cand("A", 99, 11.001)).text, "AA")

    def test_different_symbol_waits_for_cooldown(self):
        self.typer.apply(cand("A", 99, 0.0))
        self.assertEqual(self.typer.apply(cand("B", 99, 0.3)).text, "A")
        self.assertEqual(self.typer.apply(cand("B", 99, 1.5)).text, "AB")

    def test_no_match_keeps_suppression(self):
        self.typer.apply(cand("A", 99, 0.0))
        d = self.typer.apply(ClassificationEvent.no_match(0.1))
        self.assertEqual(d.label, "No sign detected")
        self.assertEqual(self.typer.snapshot().last_appended_symbol, "A")
        self.assertEqual(self.typer.apply(cand("A", 99, 0.2)).text, "A")

    def test_no_hand_never_touches_text(self):
        self.typer.apply(cand("V", 99, 0.0))
        d = self.typer.apply(ClassificationEvent.no_hand(0.1))
        self.assertEqual(d.text, "V")
        self.assertEqual(d.label, "No sign detected")
        self.assertIsNone(self.typer.snapshot().last_appended_symbol)


class TestLabel(unittest.TestCase):

    def test_label_follows_every_candidate(self):
        typer = DebouncedTyper()
        d = typer.apply(cand("W", 72.5, 0.0))
        self.assertEqual(d.label, "W (72.50%)")
        self.assertEqual(d.text, "")

    def test_format_label(self):
        self.assertEqual(format_label("Y", 99.999), "Y (100.00%)")


class TestClear(unittest.TestCase):

    def test_clear_resets_everything(self):
        typer = DebouncedTyper(cooldown_sec=1.0)
        typer.apply(cand("A", 99, 0.0))
        typer.apply(cand("B", 99, 2.0))
        d = typer.clear()
        self.assertEqual(d.text, "")
        st = typer.snapshot()
        self.assertEqual(st.accumulated_text, "")
        self.assertIsNone(st.last_appended_symbol)
        self.assertIsNone(st.last_appended_at)
        # timer sentinel: the next confident sign types immediately
        self.assertEqual(typer.apply(cand("B", 99, 2.1)).text, "B")

    def test_clear_on_fresh_state(self):
        typer = DebouncedTyper()
        self.assertEqual(typer.clear().text, "")
        self.assertIsNone(typer.snapshot().last_appended_symbol)


class TestTextGrowth(unittest.TestCase):

    def test_text_only_grows_by_one_symbol(self):
        typer = DebouncedTyper(min_confidence=95.0, cooldown_sec=0.25)
        events = []
        t = 0.0
        for i, sym in enumerate("AABBSAVVWLIYYA"):
            t += 0.1 * (i % 4)
            if i % 5 == 4:
                events.append(ClassificationEvent.no_hand(t))
            elif i % 7 == 6:
                events.append(ClassificationEvent.no_match(t))
            else:
                events.append(cand(sym, 90 + (i * 3) % 10, t))

        prev = ""
        for ev in events:
            text = typer.apply(ev).text
            self.assertTrue(text == prev or (text.startswith(prev) and len(text) == len(prev) + 1))
            prev = text


if __name__ == '__main__':
    unittest.main()
