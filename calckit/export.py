"""History export for calckit.

Formats: json, yaml, markdown and html (the last two via jinja2 templates).
"""

import json
from pathlib import Path
from typing import List, Optional

import yaml
from jinja2 import Environment, PackageLoader, select_autoescape

from .history import HistoryEntry


EXPORT_FORMATS = ("json", "yaml", "markdown", "html")

TEMPLATES = {
    "markdown": "history.md.j2",
    "html": "history.html.j2",
}


def _jinja_env() -> Environment:
    return Environment(
        loader=PackageLoader("calckit", "templates"),
        autoescape=select_autoescape(["html.j2", "html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def export_history(
    entries: List[HistoryEntry], fmt: str = "json", theme: str = "dark"
) -> str:
    """Render history entries in the given format.

    Args:
        entries: Entries, most recent first.
        fmt: One of EXPORT_FORMATS.
        theme: Colour theme class used by the html export.

    Returns:
        The rendered document.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(
            f"Unknown export format {fmt!r} (expected one of: {', '.join(EXPORT_FORMATS)})"
        )

    if fmt == "json":
        return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            [e.to_dict() for e in entries], sort_keys=False, allow_unicode=True
        )

    template = _jinja_env().get_template(TEMPLATES[fmt])
    return template.render(entries=entries, theme=theme)


def write_export(
    entries: List[HistoryEntry],
    fmt: str,
    output: Optional[str] = None,
    theme: str = "dark",
) -> str:
    """Render and optionally write an export; returns the rendered text."""
    content = export_history(entries, fmt, theme=theme)
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return content
