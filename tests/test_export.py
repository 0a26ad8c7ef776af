"""Tests for export.py - History export formats."""

import json

import pytest
import yaml

from calckit.export import EXPORT_FORMATS, export_history, write_export
from calckit.history import HistoryEntry


@pytest.fixture
def entries():
    return [
        HistoryEntry("8 × 2", 16.0, "2025-01-15 10:01:00"),
        HistoryEntry("5 + 3", 8.0, "2025-01-15 10:00:00"),
    ]


class TestExportHistory:
    """Tests for export_history function."""

    def test_json(self, entries):
        data = json.loads(export_history(entries, "json"))
        assert data[0] == {
            "expression": "8 × 2",
            "result": 16.0,
            "timestamp": "2025-01-15 10:01:00",
        }
        assert len(data) == 2

    def test_yaml(self, entries):
        data = yaml.safe_load(export_history(entries, "yaml"))
        assert [item["expression"] for item in data] == ["8 × 2", "5 + 3"]

    def test_markdown(self, entries):
        text = export_history(entries, "markdown")
        assert text.startswith("# Calculation History")
        assert "| 1 | `8 × 2` | 16 | 2025-01-15 10:01:00 |" in text
        assert "| 2 | `5 + 3` | 8 |" in text

    def test_markdown_empty(self):
        assert "No calculations yet" in export_history([], "markdown")

    def test_html(self, entries):
        text = export_history(entries, "html", theme="light")
        assert '<body class="light-mode">' in text
        assert text.count('class="history-item"') == 2
        assert "= 16" in text

    def test_html_escapes(self):
        entry = HistoryEntry("<b>1</b> + 1", 2.0, "")
        text = export_history([entry], "html")
        assert "&lt;b&gt;" in text
        assert "<b>1</b>" not in text

    def test_unknown_format(self, entries):
        with pytest.raises(ValueError):
            export_history(entries, "csv")

    def test_all_formats_render(self, entries):
        for fmt in EXPORT_FORMATS:
            assert export_history(entries, fmt)


class TestWriteExport:
    """Tests for write_export function."""

    def test_writes_file(self, entries, tmp_path):
        output = tmp_path / "out" / "history.md"
        content = write_export(entries, "markdown", str(output))
        assert output.read_text(encoding="utf-8") == content

    def test_without_output(self, entries):
        assert write_export(entries, "json") == export_history(entries, "json")
