"""Euler step records, drawing segments and the table result.

Core Components:
    - StepRecord: State of one Euler iteration (x, y, slope, increment)
    - Segment: Straight line between two points, used for field arrows and polylines
    - StepTable: Complete record sequence of one table run with its inputs

Typical Usage:
    ```python
    from py_eulercalc import Calculator

    table = Calculator().table("0.3*(300 - y)", 0.1, 0, 350, 10, precision=6)
    for n, rec in enumerate(table):
        print(n, rec.x, rec.y, rec.yp, rec.dy)
    ```
"""
from __future__ import annotations
import typing
from dataclasses import dataclass, field

from typing_extensions import Iterator, NamedTuple, Tuple

if typing.TYPE_CHECKING:
    from pandas import DataFrame
    from matplotlib.axes import Axes

__all__ = (
    'StepRecord',
    'Segment',
    'StepTable',
)


class StepRecord(NamedTuple):
    """One Euler iteration.

    Attributes:
        x: Independent variable at the start of the step.
        y: Approximate solution at x.
        yp: Slope f(x, y), rounded.
        dy: Increment yp * step, rounded.
    """
    x: float
    y: float
    yp: float
    dy: float


class Segment(NamedTuple):
    """Line from (x0, y0) to (x1, y1)."""
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class StepTable:
    """Result of a fixed-endpoint Euler run.

    Attributes:
        formula: Right-hand side f(x, y) as given.
        step: Rounded step size actually used.
        precision: Rounding precision (decimal digits).
        records: One StepRecord per iteration, first at x0.
    """

    formula: str
    step: float
    precision: int
    records: Tuple[StepRecord, ...] = field(repr=False)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[StepRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> StepRecord:
        return self.records[index]

    def segments(self) -> Tuple[Segment, ...]:
        """Consecutive records joined as (x0, y0, x1, y1) segments."""
        return tuple(Segment(a.x, a.y, b.x, b.y) for a, b in zip(self.records, self.records[1:]))

    def dataframe(self, formatted: bool = False) -> DataFrame:
        """Return the step table as a DataFrame.

        Args:
            formatted: False for float columns; True for strings at the table precision.

        Raises:
            ImportError: If pandas is not installed.
        """
        try:
            from py_eulercalc.visualize.dataframe import step_table_as_dataframe
            return step_table_as_dataframe(self, formatted)
        except ImportError as err:
            raise ImportError(
                "Use `pip install py_eulercalc[visualize]` to get the step table as pandas.DataFrame"
            ) from err

    def plot(self, ax: typing.Optional[Axes] = None) -> Axes:
        """Return a graph of the approximation.

        Raises:
            ImportError: If matplotlib is not installed.
        """
        try:
            from py_eulercalc.visualize.plot import step_table_as_plot
            return step_table_as_plot(self, ax)
        except ImportError as err:
            raise ImportError(
                "Use `pip install py_eulercalc[visualize]` to get results as a plot"
            ) from err
