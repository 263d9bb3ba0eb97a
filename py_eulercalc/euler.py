"""Explicit Euler stepping for y' = f(x, y).

The Euler method approximates the solution of dy/dx = f(x, y) by

    y(x + h) = y(x) + h * f(x, y(x))

Every quantity is rounded to a fixed number of decimal digits right after it is computed
(step size, slope, increment, and both advanced coordinates), so the simulated state is
exactly the state a table prints, and two runs with the same inputs give identical records.

Classes:
    EulerStepper: Fixed-endpoint runs (`run`) and predicate-bounded runs (`run_while`)

Examples:
    >>> from py_eulercalc.expression import Expression
    >>> stepper = EulerStepper()
    >>> records = stepper.run(Expression.compile("0.3*(300 - y)"), 0.1, 0, 350, 10, 6)
    >>> records[1].y
    348.5
"""
import math

from typing_extensions import Callable, Iterator, Optional, Tuple

from py_eulercalc.config import EulerConfig, get_config
from py_eulercalc.exceptions import ExpressionError, NonTerminatingStepError, StepLimitError
from py_eulercalc.expression import EvalContext, Expression
from py_eulercalc.logger import logger
from py_eulercalc.rounding import round_to_precision
from py_eulercalc.step_data import StepRecord

__all__ = ('EulerStepper', 'StopPredicate')

#: keep_going(x, y) -> bool, checked before each step is recorded
StopPredicate = Callable[[float, float], bool]


class EulerStepper:
    """Euler integration with a fixed rounding discipline.

    Attributes:
        config: Constants in effect; only `cMaxSteps` is used here.
        integration_step_count: Total steps taken by this instance.
    """

    def __init__(self, config: Optional[EulerConfig] = None) -> None:
        self.config: EulerConfig = config if config is not None else get_config()
        self.integration_step_count: int = 0

    def run(self, expr: Expression, step: float, x0: float, y0: float, x_end: float,
            precision: int) -> Tuple[StepRecord, ...]:
        """Step from x0 until x passes x_end.

        `x_end` is rounded to `precision` like every other quantity, so the last record is
        the last point of the x0 + n*step grid that does not pass it.

        Args:
            expr: Right-hand side f(x, y).
            step: Step size; negative steps walk towards a smaller x_end.
            x0: Initial x.
            y0: Initial y.
            x_end: Last x to include.
            precision: Decimal digits kept after every operation.

        Returns:
            One StepRecord per iteration, the first at x0.

        Raises:
            NonTerminatingStepError: If the rounded step is zero or points away from x_end.
            StepLimitError: If the run would take more than cMaxSteps steps.
            ExpressionError: If f cannot be evaluated at a visited point, or y overflows.
        """
        step = round_to_precision(step, precision)
        x = round_to_precision(x0, precision)
        y = round_to_precision(y0, precision)
        end = round_to_precision(x_end, precision)
        span = end - x

        if step == 0:
            raise NonTerminatingStepError(step, span, f"step rounds to zero at precision {precision}")
        if span != 0 and (span > 0) != (step > 0):
            raise NonTerminatingStepError(step, span, "step points away from x_end")
        self._check_step_count(step, span)

        if step > 0:
            keep_going: StopPredicate = lambda x_, _: x_ <= end
        else:
            keep_going = lambda x_, _: x_ >= end

        records = tuple(self._iterate(expr, step, x, y, precision, keep_going))
        logger.debug(f"Euler ran {len(records)} steps from x={x} to x={records[-1].x}")
        return records

    def run_while(self, expr: Expression, step: float, x0: float, y0: float, precision: int,
                  keep_going: StopPredicate) -> Tuple[StepRecord, ...]:
        """Step from (x0, y0) while `keep_going(x, y)` holds.

        The predicate is checked on each rounded point before f is evaluated there, so the
        first point that fails it is neither evaluated nor recorded. The number of steps
        is not known in advance; cMaxSteps is enforced while stepping.

        Args:
            expr: Right-hand side f(x, y).
            step: Step size, must be > 0 after rounding.
            x0: Initial x.
            y0: Initial y.
            precision: Decimal digits kept after every operation.
            keep_going: Stop predicate.

        Returns:
            Records of every point accepted by the predicate (possibly none).

        Raises:
            NonTerminatingStepError: If the rounded step is not positive.
            StepLimitError: If the predicate still holds after cMaxSteps steps.
            ExpressionError: If f cannot be evaluated at an accepted point.
        """
        step = round_to_precision(step, precision)
        x = round_to_precision(x0, precision)
        y = round_to_precision(y0, precision)
        if step <= 0:
            raise NonTerminatingStepError(step, reason=f"step must be positive at precision {precision}")

        records = tuple(self._iterate(expr, step, x, y, precision, keep_going, self.config.cMaxSteps))
        logger.debug(f"Euler ran {len(records)} bounded steps from x={x}")
        return records

    def _check_step_count(self, step: float, span: float) -> None:
        expected = math.floor(span / step) + 1
        if expected > self.config.cMaxSteps:
            raise StepLimitError(step, self.config.cMaxSteps, expected)

    def _iterate(self, expr: Expression, step: float, x: float, y: float, precision: int,
                 keep_going: StopPredicate, limit: Optional[int] = None) -> Iterator[StepRecord]:
        context = EvalContext(x, y)
        slope = expr.bind(context)
        count = 0
        while keep_going(context.x, context.y):
            if limit is not None and count >= limit:
                raise StepLimitError(step, limit)
            if not math.isfinite(context.y):
                raise ExpressionError(expr.formula, "solution overflowed", (context.x, context.y))
            yp = round_to_precision(slope.evaluate(), precision)
            dy = round_to_precision(yp * step, precision)
            if not math.isfinite(dy):
                raise ExpressionError(expr.formula, f"increment overflowed ({yp} * {step})", (context.x, context.y))
            yield StepRecord(context.x, context.y, yp, dy)
            count += 1
            self.integration_step_count += 1
            context.x = round_to_precision(context.x + step, precision)
            context.y = round_to_precision(context.y + dy, precision)
