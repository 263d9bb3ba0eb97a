"""Text renderings of step tables and direction fields.

Every number goes through `round_to_precision` and is then printed with exactly
`precision` decimals, so the text never depends on native float formatting.

Functions:
    format_plain: Aligned terminal table with columns n, x, y, y', Δy
    format_latex: Standalone LaTeX document holding a longtable
    format_csv: CSV with header x,y,y',Δy
    format_csv_segments: CSV of consecutive record pairs, header x0,y0,x1,y1
    format_table: Dispatch on TableFormat
    format_tikz: TikZ picture of a DirectionField
"""
from enum import Enum

from typing_extensions import List, Optional

from py_eulercalc.config import EulerConfig, get_config
from py_eulercalc.field.result import DirectionField
from py_eulercalc.rounding import round_to_precision
from py_eulercalc.step_data import StepTable

__all__ = (
    'TableFormat',
    'fixed',
    'format_plain',
    'format_latex',
    'format_csv',
    'format_csv_segments',
    'format_table',
    'format_tikz',
)


class TableFormat(Enum):
    PLAIN = 'plain'
    LATEX = 'latex'
    CSV = 'csv'
    CSV_SEGMENTS = 'csv_segments'


def fixed(value: float, precision: int) -> str:
    """`value` rounded half away from zero and printed with `precision` decimals."""
    return f"{round_to_precision(value, precision):.{precision}f}"


def _cells(table: StepTable) -> List[List[str]]:
    p = table.precision
    return [[fixed(r.x, p), fixed(r.y, p), fixed(r.yp, p), fixed(r.dy, p)] for r in table]


def format_plain(table: StepTable) -> str:
    headers = ["x ", "y ", "y' ", "Δy "]
    rows = [[f" {c} " for c in row] for row in _cells(table)]
    widths = [max([len(h)] + [len(row[i]) for row in rows]) for i, h in enumerate(headers)]
    n_width = max(len(str(len(rows))), len("n "))

    lines = ['|'.join([f"{'n ':>{n_width}}"] + [f"{h:>{w}}" for h, w in zip(headers, widths)])]
    for n, row in enumerate(rows):
        lines.append('|'.join([f"{n:>{n_width}}"] + [f"{c:>{w}}" for c, w in zip(row, widths)]))
    return '\n'.join(lines) + '\n'


def format_latex(table: StepTable) -> str:
    lines = [
        "\\documentclass{article}",
        "\\usepackage[margin=1in]{geometry}",
        "\\usepackage{longtable}",
        "\\begin{document}",
        "\\begin{center}",
        "  \\begin{longtable}{|c|c|c|c|c|}",
        "    \\hline",
        "    n & x & y & y' & $\\Delta$y \\\\",
        "    \\hline",
    ]
    for n, row in enumerate(_cells(table)):
        lines.append(f"    {n} & {' & '.join(row)} \\\\")
        lines.append("    \\hline")
    lines += [
        "  \\end{longtable}",
        "\\end{center}",
        "\\end{document}",
    ]
    return '\n'.join(lines) + '\n'


def format_csv(table: StepTable) -> str:
    lines = ["x,y,y',Δy"]
    lines.extend(','.join(row) for row in _cells(table))
    return '\n'.join(lines) + '\n'


def format_csv_segments(table: StepTable) -> str:
    p = table.precision
    lines = ["x0,y0,x1,y1"]
    lines.extend(','.join(fixed(v, p) for v in seg) for seg in table.segments())
    return '\n'.join(lines) + '\n'


_TABLE_FORMATTERS = {
    TableFormat.PLAIN: format_plain,
    TableFormat.LATEX: format_latex,
    TableFormat.CSV: format_csv,
    TableFormat.CSV_SEGMENTS: format_csv_segments,
}


def format_table(table: StepTable, fmt: TableFormat = TableFormat.PLAIN) -> str:
    return _TABLE_FORMATTERS[fmt](table)


def format_tikz(result: DirectionField, config: Optional[EulerConfig] = None) -> str:
    """Render a direction field as a TikZ picture scaled to the line width.

    The picture holds the t-axis and the y-axis (drawn to `y_min + x_range`, the projected
    top of the domain), one thin line per field segment and, when the curve is non-empty,
    a single `plot coordinates` path.
    """
    config = config if config is not None else get_config()
    p = result.precision

    def point(x: float, y: float) -> str:
        return f"({fixed(x, p)},{fixed(y, p)})"

    d = result.domain
    lines = [
        "\\begin{center}",
        "\\resizebox{\\linewidth}{!}{%",
        f"\\begin{{tikzpicture}}[scale={config.cTikzScale:g}]",
        f"  \\draw[->] {point(d.x_min, d.y_min)} -- {point(d.x_max, d.y_min)} node[right] {{$t$}};",
        f"  \\draw[->] {point(d.x_min, d.y_min)} -- {point(d.x_min, result.projector.y_top)} node[above] {{$y$}};",
    ]
    for seg in result.segments:
        lines.append(f"  \\draw[{config.cFieldStyle}] {point(seg.x0, seg.y0)} -- {point(seg.x1, seg.y1)};")
    if vertices := result.curve_points():
        coordinates = ' '.join(point(x, y) for x, y in vertices)
        lines.append(f"  \\draw[{config.cCurveStyle}] plot coordinates {{ {coordinates} }};")
    lines += [
        "\\end{tikzpicture}%",
        "}",
        "\\end{center}",
    ]
    return '\n'.join(lines) + '\n'
