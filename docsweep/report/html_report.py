# File: docsweep/report/html_report.py
"""docsweep.report.html_report: HTML summary of a sweep, rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docsweep.aggregator import SweepReport

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    report: SweepReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render *report* through ``report.html.j2`` and save it.

    Args:
        report: the SweepReport of a finished sweep.
        template_dir: directory holding ``report.html.j2``; ``None`` uses the
            template bundled with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "summary": report.summary(),
        "blank_pages": report.blank_pages,
        "published": report.published,
        "errors": report.errors,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
