"""Tests for session.py - Engine wired to history, preferences and display."""

import io
import json

import pytest
from rich.console import Console

from calckit.config import CalcConfig
from calckit.engine import DivisionByZeroError, ErrorPolicy
from calckit.session import CalculatorSession, get_session


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=80)


@pytest.fixture
def session(tmp_path, out):
    return CalculatorSession(str(tmp_path), out=out, echo=False)


class TestCalculatorSession:
    """Tests for CalculatorSession class."""

    def test_feed_evaluates(self, session):
        errors = session.feed(["5", "+", "3", "x", "2", "="])
        assert errors == []
        assert session.display() == ("16", "")

    def test_history_persists(self, session, tmp_path, out):
        session.feed(["12+30="])
        again = CalculatorSession(str(tmp_path), out=out, echo=False)
        assert [e.expression for e in again.recent_history()] == ["12 + 30"]

    def test_division_by_zero_reported(self, session, out):
        errors = session.feed(["5/0="])
        assert len(errors) == 1
        assert isinstance(errors[0], DivisionByZeroError)
        assert session.history.size == 0
        assert "Cannot divide by zero!" in out.file.getvalue()

    def test_unknown_token(self, session):
        with pytest.raises(ValueError):
            session.feed(["5?"])

    def test_config_applied(self, tmp_path, out):
        config = CalcConfig(
            history_capacity=2, thousands_separator=".", error_policy=ErrorPolicy.RESET
        )
        session = CalculatorSession(str(tmp_path), config=config, out=out, echo=False)
        session.feed(["1+1=", "2+2=", "3+3=", "1234567"])
        assert session.history.size == 2
        assert session.display() == ("1.234.567", "")

        session.feed(["/0="])
        assert session.engine.current_operand == "0"
        assert session.engine.previous_operand == ""

    def test_config_loaded_from_project(self, tmp_path, out):
        data_dir = tmp_path / ".calckit"
        data_dir.mkdir()
        (data_dir / "config.json").write_text(json.dumps({"history": {"shown": 1}}))
        session = CalculatorSession(str(tmp_path), out=out, echo=False)
        session.feed(["1+1=", "2+2="])
        assert len(session.recent_history()) == 1

    def test_recent_history_filtered(self, session):
        session.feed(["16", "sqrt", "1+1=", "9", "sqrt"])
        assert [e.expression for e in session.recent_history(term="sqrt")] == [
            "sqrt(9)",
            "sqrt(16)",
        ]
        assert len(session.recent_history(1, "sqrt")) == 1
        assert session.recent_history(term="cos") == []

    def test_feed_clicks_on_button_tokens(self, session, monkeypatch):
        clicks = []
        monkeypatch.setattr(session.renderer, "click", lambda: clicks.append(1))
        session.feed(["16", "sqrt", "7", "+", "2", "="])
        assert len(clicks) == 3

    def test_load_from_history(self, session):
        session.feed(["6x7=", "Escape"])
        entry = session.load_from_history(0)
        assert entry.expression == "6 × 7"
        assert session.engine.current_operand == "42"
        assert session.engine.should_reset_screen is True
        assert session.renderer.last_frame == ("42", "")

    def test_load_missing_entry(self, session):
        assert session.load_from_history(3) is None

    def test_clear_history(self, session, tmp_path, out):
        session.feed(["1+1="])
        session.clear_history()
        assert CalculatorSession(str(tmp_path), out=out).history.size == 0

    def test_toggle_theme_updates_renderer(self, session):
        assert session.toggle_theme() == "light"
        assert session.renderer.theme.name == "light"
        assert session.toggle_theme("dark") == "dark"
        assert session.renderer.theme.name == "dark"

    def test_toggle_mode(self, session):
        assert session.toggle_mode() == "scientific"
        assert session.toggle_mode("basic") == "basic"

    def test_sound_clicks_on_buttons(self, session, monkeypatch):
        clicks = []
        monkeypatch.setattr(session.renderer, "click", lambda: clicks.append(1))

        session.press_button("7")
        assert len(clicks) == 1

        session.toggle_sound(False)
        session.press_button("8")
        assert len(clicks) == 1
        assert session.engine.current_operand == "78"

    def test_keys_do_not_click(self, session, monkeypatch):
        clicks = []
        monkeypatch.setattr(session.renderer, "click", lambda: clicks.append(1))
        assert session.press_key("7") is True
        assert clicks == []

    def test_get_session(self, tmp_path, out):
        assert isinstance(get_session(str(tmp_path), out=out), CalculatorSession)
