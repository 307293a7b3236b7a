"""Report builder — text and JSON output for hdrcolor results."""

import json
from typing import Any

from hdrcolor.core.types import Report


def _fmt(v: float | None) -> str:
    return 'n/a' if v is None else f'{v:.4f}'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'hdrcolor: {report.title}' if report.title else 'hdrcolor'
    lines.append(f'{header} ({len(report.entries)} colours)')
    lines.append('')

    width = max((len(e['label']) for e in report.entries), default=0)
    for e in report.entries:
        channels = ' '.join(_fmt(e[k]) for k in ('r', 'g', 'b'))
        r, g, b, a = e['display']
        mark = '  clamped' if e['clamped'] else ''
        lines.append(f'  {e["label"]:<{width}}  {e["hex"]}  [{channels}]  rgba({r},{g},{b},{a}){mark}')

    if report.clamped_count:
        lines.append('')
        lines.append(f'{report.clamped_count}/{len(report.entries)} colours outside [0, 1], clamped for display')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'title': report.title,
        'colors': report.entries,
        'summary': {
            'total': len(report.entries),
            'clamped': report.clamped_count,
        },
    }
    return json.dumps(obj, indent=2, allow_nan=False)
