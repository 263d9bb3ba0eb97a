"""Euler approximation curve drawn over a direction field.

The curve uses the same rounded Euler arithmetic as a step table, but instead of running
to a fixed x it stops as soon as the point leaves the domain: x passes x_max, or y leaves
[y_min, y_max]. Kept points are projected into drawing space and joined into a polyline.
"""
from dataclasses import dataclass
import math

from typing_extensions import List, Optional, Tuple

from py_eulercalc.config import EulerConfig, get_config
from py_eulercalc.euler import EulerStepper
from py_eulercalc.exceptions import NonTerminatingStepError
from py_eulercalc.expression import Expression
from py_eulercalc.field.projector import Domain, FieldProjector
from py_eulercalc.logger import logger
from py_eulercalc.rounding import round_to_precision
from py_eulercalc.step_data import Segment

__all__ = ('CurveSpec', 'overlay_curve')


@dataclass(frozen=True)
class CurveSpec:
    """Step size and initial condition of the overlaid curve.

    Attributes:
        step: Euler step, > 0.
        x_init: Initial x; None means the domain's x_min.
        y_init: Initial y; None means the domain's y_min.

    Raises:
        NonTerminatingStepError: If step is not a positive finite number.
    """
    step: float
    x_init: Optional[float] = None
    y_init: Optional[float] = None

    def __post_init__(self):
        if not (math.isfinite(self.step) and self.step > 0):
            raise NonTerminatingStepError(self.step, reason="curve step must be positive")

    def initial_point(self, domain: Domain) -> Tuple[float, float]:
        x0 = domain.x_min if self.x_init is None else self.x_init
        y0 = domain.y_min if self.y_init is None else self.y_init
        return x0, y0


def overlay_curve(expr: Expression, domain: Domain, curve: CurveSpec, precision: int,
                  config: Optional[EulerConfig] = None,
                  stepper: Optional[EulerStepper] = None) -> Tuple[Segment, ...]:
    """Euler polyline from the curve's initial point until it leaves `domain`.

    Args:
        expr: Right-hand side f(x, y).
        domain: Bounding region; also defines the projection.
        curve: Step and initial condition.
        precision: Decimal digits kept after every operation.
        config: Constants; `cCurveTolerance` is used here, `cMaxSteps` by the stepper.
        stepper: Stepper to reuse, a new one by default.

    Returns:
        Consecutive drawing-space segments, or an empty tuple when fewer than two points
        lie inside the domain (in particular when the initial point is already outside).

    Raises:
        NonTerminatingStepError: If the step rounds to zero at `precision`.
        StepLimitError: If the curve stays inside the domain for more than cMaxSteps steps.
        ExpressionError: If f fails at a point inside the domain.
    """
    config = config if config is not None else get_config()
    stepper = stepper if stepper is not None else EulerStepper(config)
    projector = FieldProjector(domain)
    tol = config.cCurveTolerance
    x_limit = domain.x_max + tol
    y_low, y_high = domain.y_min - tol, domain.y_max + tol

    exits: List[Tuple[float, float]] = []

    def inside(x: float, y: float) -> bool:
        if x <= x_limit and y_low <= y <= y_high:
            return True
        exits.append((x, y))
        return False

    x0, y0 = curve.initial_point(domain)
    records = stepper.run_while(expr, curve.step, x0, y0, precision, inside)

    points = [(round_to_precision(projector.project_x(r.x), precision),
               round_to_precision(projector.project_y(r.y), precision)) for r in records]
    if exits and exits[0][0] > x_limit:
        reason = "passed x_max"
    else:
        reason = "left the y range"
    logger.debug(f"Curve overlay kept {len(points)} points from ({x0}, {y0}), stopped: {reason}")
    if len(points) < 2:
        return ()
    return tuple(Segment(a[0], a[1], b[0], b[1]) for a, b in zip(points, points[1:]))
