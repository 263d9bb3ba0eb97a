"""Aspect-normalising projection from the (x, y) domain into drawing space.

The x and y ranges of a direction field can differ by orders of magnitude (e.g. 210 time
units against 35 temperature units). Drawn on equal unit axes the arrows would be almost
flat or almost vertical everywhere. The projector keeps x as the reference axis and
stretches y about `y_min` by

    y_scale = x_range / y_range

so the domain is drawn as a square of side `x_range`. Slopes are re-expressed with the
same factor before they become arrow directions.

Classes:
    Domain: Rectangle [x_min, x_max] x [y_min, y_max]
    GridSpacing: Requested spacing of field samples in drawing space
    FieldProjector: The linear map and its derived quantities

Examples:
    >>> p = FieldProjector(Domain(0, 60, 210, 95))
    >>> p.y_scale
    6.0
    >>> p.project_y(95)
    270.0
"""
import math
from dataclasses import dataclass

from py_eulercalc.exceptions import DegenerateDomainError, NonTerminatingStepError

__all__ = (
    'Domain',
    'GridSpacing',
    'FieldProjector',
)


@dataclass(frozen=True)
class Domain:
    """Rectangular region of the (x, y) plane.

    Raises:
        DegenerateDomainError: If a bound is not finite, or max <= min on either axis.
    """
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def __post_init__(self):
        for name in ('x_min', 'y_min', 'x_max', 'y_max'):
            if not math.isfinite(getattr(self, name)):
                raise DegenerateDomainError(f"{name} must be finite, got {getattr(self, name)}")
        if self.x_max <= self.x_min:
            raise DegenerateDomainError(f"x range [{self.x_min}, {self.x_max}] must be increasing")
        if self.y_max <= self.y_min:
            raise DegenerateDomainError(f"y range [{self.y_min}, {self.y_max}] must be increasing")

    @property
    def x_range(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_range(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class GridSpacing:
    """Field sample spacing, both strictly positive.

    Raises:
        NonTerminatingStepError: If a spacing is zero, negative or not finite.
    """
    x_step: float
    y_step: float

    def __post_init__(self):
        for value in (self.x_step, self.y_step):
            if not (math.isfinite(value) and value > 0):
                raise NonTerminatingStepError(value, reason="grid spacing must be positive")


class FieldProjector:
    """Uniform linear map from the logical domain into drawing space.

    Attributes:
        domain: The logical domain.
        y_scale: x_range / y_range.
        y_top: Drawing-space top of the y-axis, y_min + x_range.
    """

    __slots__ = ('domain', 'y_scale', 'y_top')

    def __init__(self, domain: Domain):
        self.domain = domain
        self.y_scale: float = domain.x_range / domain.y_range
        self.y_top: float = domain.y_min + domain.x_range

    def project_x(self, x: float) -> float:
        return x

    def project_y(self, y: float) -> float:
        return self.domain.y_min + (y - self.domain.y_min) * self.y_scale

    def project(self, x: float, y: float) -> tuple:
        return self.project_x(x), self.project_y(y)

    def scale_slope(self, m: float) -> float:
        """Slope of the same line once drawn in projected space."""
        return m * self.y_scale

    def y_sample_step(self, grid: GridSpacing) -> float:
        """Logical y increment that is `grid.y_step` apart once projected."""
        return grid.y_step / self.y_scale

    def __repr__(self) -> str:
        return f"FieldProjector({self.domain!r}, y_scale={self.y_scale})"
