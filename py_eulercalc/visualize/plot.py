"""Matplotlib rendering of step tables and direction fields.

It is used by StepTable.plot() and DirectionField.plot().

Core Functions:
    - step_table_as_plot: Euler polyline with its step points
    - direction_field_as_plot: Field segments and curve overlay in drawing space
    - show_plot: Display the current figure

Examples:
    ```python
    from py_eulercalc import Calculator, Domain, GridSpacing, CurveSpec
    from py_eulercalc.visualize.plot import show_plot

    field = Calculator().direction_field("0.3*(300 - y)", Domain(0, 60, 210, 95),
                                         GridSpacing(5, 5), 2, CurveSpec(0.5, 0, 90))
    ax = field.plot()
    show_plot()
    ```

Dependencies:
    This module requires matplotlib as an optional dependency. Install via:
    `pip install py_eulercalc[visualize]`

Note:
    Direction fields are drawn in the projected (square) space, like the TikZ output.
    The y tick labels are mapped back to logical y values.
"""
# pylint: skip-file
from __future__ import annotations
# Standard library imports
import warnings

# Third-party imports
from typing_extensions import Any, Optional

# Local imports
from py_eulercalc.field.result import DirectionField
from py_eulercalc.step_data import StepTable

# Handle optional matplotlib dependency with graceful degradation
try:
    import matplotlib
    from matplotlib.axes import Axes
    from matplotlib.collections import LineCollection
    from matplotlib import pyplot, ticker

    assert matplotlib
except (ImportError, AssertionError) as error:
    warnings.warn("Install matplotlib to get results as a plot", UserWarning)
    raise error

__all__ = (
    'show_plot',
    'step_table_as_plot',
    'direction_field_as_plot',
)

PLOT_COLORS: dict[Any, tuple[float, float, float, float]] = {
    "field": (108 / 255, 142 / 255, 191 / 255, 1.0),
    "curve": (184 / 255, 84 / 255, 80 / 255, 1.0),
    "frame": (.0, .0, .0, 1.0),
}


def show_plot() -> None:
    """Display the current matplotlib figure using the configured backend."""
    pyplot.show()


def step_table_as_plot(table: StepTable, ax: Optional[Axes] = None) -> Axes:
    """Plot the Euler approximation of a StepTable.

    Args:
        table: Result of a table run.
        ax: Axes to draw into; a new figure is created when None.

    Returns:
        The Axes holding the plot.
    """
    if ax is None:
        _, ax = pyplot.subplots()
    xs = [r.x for r in table]
    ys = [r.y for r in table]
    ax.plot(xs, ys, color=PLOT_COLORS["curve"], marker='.', linewidth=1.0,
            label=f"y' = {table.formula}, h = {table.step}")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True, linestyle=':')
    ax.legend(loc='best')
    return ax


def direction_field_as_plot(field: DirectionField, ax: Optional[Axes] = None) -> Axes:
    """Plot field segments and the optional curve overlay.

    Args:
        field: Result of a direction field run.
        ax: Axes to draw into; a new figure is created when None.

    Returns:
        The Axes holding the plot.
    """
    if ax is None:
        _, ax = pyplot.subplots()
    domain = field.domain
    projector = field.projector

    lines = [[(s.x0, s.y0), (s.x1, s.y1)] for s in field.segments]
    ax.add_collection(LineCollection(lines, colors=[PLOT_COLORS["field"]], linewidths=0.8))

    if points := field.curve_points():
        ax.plot([p[0] for p in points], [p[1] for p in points],
                color=PLOT_COLORS["curve"], linewidth=1.5, label="Euler approximation")
        ax.legend(loc='best')

    margin = field.grid.x_step / 2
    ax.set_xlim(domain.x_min - margin, domain.x_max + margin)
    ax.set_ylim(domain.y_min - margin, projector.y_top + margin)
    ax.set_aspect('equal')
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(
        lambda v, _: f"{domain.y_min + (v - domain.y_min) / projector.y_scale:.4g}"
    ))
    ax.set_xlabel("t")
    ax.set_ylabel("y")
    ax.set_title(f"y' = {field.formula}")
    return ax
