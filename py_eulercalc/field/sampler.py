"""Direction-field sampling.

Each grid point (x, y) gets a short segment of fixed drawing length, centred on the
projected point and pointing along the projected slope:

    m_scaled = f(x, y) * y_scale
    (dx, dy) = L * (1, m_scaled) / sqrt(1 + m_scaled**2)

Grid coordinates are computed as `start + i * step` rather than by repeated addition, and
the far edge is included when floating error leaves it short by less than `cGridTolerance`
of a step. Traversal order is x outer, y inner.
"""
import math

from typing_extensions import Iterator, List, Optional, Tuple

from py_eulercalc.config import EulerConfig, get_config
from py_eulercalc.expression import EvalContext, Expression
from py_eulercalc.field.projector import Domain, FieldProjector, GridSpacing
from py_eulercalc.logger import logger
from py_eulercalc.rounding import round_to_precision
from py_eulercalc.step_data import Segment

__all__ = ('grid_points', 'sample_field')


def grid_points(start: float, stop: float, step: float, tolerance: float = 0.0) -> Iterator[float]:
    """Yield start, start + step, ... up to stop (inclusive within `tolerance` steps)."""
    count = math.floor((stop - start) / step + tolerance)
    for i in range(count + 1):
        yield start + i * step


def sample_field(expr: Expression, domain: Domain, grid: GridSpacing, precision: int,
                 config: Optional[EulerConfig] = None) -> Tuple[Segment, ...]:
    """Sample the slope field of `expr` over `domain`.

    Args:
        expr: Right-hand side f(x, y).
        domain: Region to cover.
        grid: Spacing between samples, measured in drawing space.
        precision: Decimal digits kept for segment end points.
        config: Constants; `cSegmentLength` and `cGridTolerance` are used.

    Returns:
        One drawing-space Segment per grid point, x outer, y inner.

    Raises:
        ExpressionError: If f fails at any grid point. Nothing is returned in that case.
    """
    config = config if config is not None else get_config()
    projector = FieldProjector(domain)
    half = config.cSegmentLength / 2.0
    y_step = projector.y_sample_step(grid)

    context = EvalContext()
    slope = expr.bind(context)
    segments: List[Segment] = []
    for x in grid_points(domain.x_min, domain.x_max, grid.x_step, config.cGridTolerance):
        context.x = x
        for y in grid_points(domain.y_min, domain.y_max, y_step, config.cGridTolerance):
            context.y = y
            m_scaled = projector.scale_slope(slope.evaluate())
            norm = math.hypot(1.0, m_scaled)
            dx = half / norm
            dy = half * m_scaled / norm
            px, py = projector.project(x, y)
            segments.append(Segment(
                round_to_precision(px - dx, precision),
                round_to_precision(py - dy, precision),
                round_to_precision(px + dx, precision),
                round_to_precision(py + dy, precision),
            ))
    logger.debug(f"Sampled {len(segments)} field segments for '{expr.formula}' "
                 f"(y_scale={projector.y_scale})")
    return tuple(segments)
