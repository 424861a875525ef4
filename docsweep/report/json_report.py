# docsweep/report/json_report.py

"""
JSON report for DocSweep.

Serializes a SweepReport into a file.
"""
import json
from pathlib import Path

from docsweep.aggregator import SweepReport


def render_json(report: SweepReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path* and return the path.

    Example:
    ```python
    from docsweep.report.json_report import render_json
    report_path = render_json(report, 'reports/sweep.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
