"""Tests for display.py - Rich terminal rendering."""

import io

import pytest
from rich.console import Console

from calckit.display import THEMES, DisplayRenderer
from calckit.history import HistoryEntry


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=80)


def output_of(console: Console) -> str:
    return console.file.getvalue()


class TestDisplayRenderer:
    """Tests for DisplayRenderer class."""

    def test_render_draws_both_lines(self, out):
        renderer = DisplayRenderer(out=out)
        renderer.render("1,234", "5 +")
        text = output_of(out)
        assert "1,234" in text
        assert "5 +" in text

    def test_render_without_echo_only_stores(self, out):
        renderer = DisplayRenderer(out=out, echo=False)
        renderer.render("42", "")
        assert output_of(out) == ""
        assert renderer.last_frame == ("42", "")

        renderer.show()
        assert "42" in output_of(out)

    def test_notify_error(self, out):
        DisplayRenderer(out=out).notify_error("Cannot divide by zero!")
        text = output_of(out)
        assert "Error" in text
        assert "Cannot divide by zero!" in text

    def test_theme_selection(self):
        renderer = DisplayRenderer(theme="light")
        assert renderer.theme is THEMES["light"]
        renderer.set_theme("unknown")
        assert renderer.theme is THEMES["dark"]

    def test_render_history(self, out):
        entries = [
            HistoryEntry("16 + 4", 20.0, "2025-01-15 10:00:00"),
            HistoryEntry("sqrt(2)", 1.41421356, "2025-01-15 09:59:00"),
        ]
        DisplayRenderer(out=out).render_history(entries)
        text = output_of(out)
        assert "16 + 4" in text
        assert "= 20" in text
        assert "1.41421356" in text

    def test_render_empty_history(self, out):
        DisplayRenderer(out=out).render_history([])
        assert "No calculations yet" in output_of(out)

    def test_basic_keypad(self, out):
        DisplayRenderer(out=out).render_keypad("basic")
        text = output_of(out)
        assert "Basic keypad" in text
        assert "÷" in text
        assert "sqrt" not in text

    def test_scientific_keypad(self, out):
        DisplayRenderer(out=out).render_keypad("scientific")
        text = output_of(out)
        assert "Scientific keypad" in text
        assert "sqrt" in text
        assert "power" in text
