"""HTML report rendering for corruption audits."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .corruption import FIELDS

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def _percent(value: Any) -> str:
    return f"{float(value or 0) * 100:.1f}%"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml", "html.j2"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["percent"] = _percent
    return env


def render_report(audit: dict[str, Any]) -> str:
    """Render an audit produced by ``validate_corruption`` as HTML.

    Field rows follow the corruption field order; fields missing from the
    audit are shown as unchanged. Violations are listed by record index.
    """

    fields = audit.get("fields", {})
    field_rows = [
        {"name": name, **{"mean_edit_distance": 0.0, "changed_fraction": 0.0, **fields.get(name, {})}}
        for name in FIELDS
    ]
    violations = sorted(audit.get("violations", []), key=lambda item: item.get("index", 0))

    template = _environment().get_template("report.html.j2")
    return template.render(
        run=audit.get("run") or {},
        summary=audit.get("summary", {}),
        field_rows=field_rows,
        violations=violations,
    )
