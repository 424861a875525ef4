# File: docsweep/report/__init__.py
"""docsweep.report: JSON and HTML renderers for a SweepReport."""

from __future__ import annotations

from docsweep.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from docsweep.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
