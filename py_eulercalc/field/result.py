"""Direction field result object."""
from __future__ import annotations
import typing
from dataclasses import dataclass, field

from typing_extensions import List, Optional, Tuple

from py_eulercalc.field.projector import Domain, FieldProjector, GridSpacing
from py_eulercalc.field.overlay import CurveSpec
from py_eulercalc.step_data import Segment

if typing.TYPE_CHECKING:
    from matplotlib.axes import Axes

__all__ = ('DirectionField',)


@dataclass(frozen=True)
class DirectionField:
    """Sampled direction field with an optional approximation curve, in drawing space.

    Attributes:
        formula: Right-hand side f(x, y) as given.
        domain: Logical domain.
        grid: Sample spacing.
        precision: Rounding precision (decimal digits).
        projector: Map used for every segment.
        segments: One field segment per grid point.
        curve_spec: Curve parameters, None when no curve was requested.
        curve: Consecutive curve segments; empty when not requested or left the domain at once.
    """

    formula: str
    domain: Domain
    grid: GridSpacing
    precision: int
    projector: FieldProjector = field(repr=False)
    segments: Tuple[Segment, ...] = field(repr=False)
    curve_spec: Optional[CurveSpec] = None
    curve: Tuple[Segment, ...] = field(default=(), repr=False)

    def curve_points(self) -> List[Tuple[float, float]]:
        """Curve polyline vertices, empty when there is no curve."""
        if not self.curve:
            return []
        points = [(self.curve[0].x0, self.curve[0].y0)]
        points.extend((s.x1, s.y1) for s in self.curve)
        return points

    def plot(self, ax: Optional[Axes] = None) -> Axes:
        """Return a graph of the field and curve.

        Raises:
            ImportError: If matplotlib is not installed.
        """
        try:
            from py_eulercalc.visualize.plot import direction_field_as_plot
            return direction_field_as_plot(self, ax)
        except ImportError as err:
            raise ImportError(
                "Use `pip install py_eulercalc[visualize]` to get results as a plot"
            ) from err
