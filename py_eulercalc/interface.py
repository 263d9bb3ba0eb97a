"""Calculator interface.

`Calculator` is the main entry point: it compiles formula strings, applies the default
precision from the active configuration, and hands the work to the Euler stepper, the
field sampler and the curve overlay.

Examples:
    >>> from py_eulercalc import Calculator, Domain, GridSpacing, CurveSpec
    >>> calc = Calculator()
    >>> table = calc.table("0.3*(300 - y)", step=0.1, x0=0, y0=350, x_end=10, precision=6)
    >>> table[0]
    StepRecord(x=0.0, y=350.0, yp=-15.0, dy=-1.5)
    >>> field = calc.direction_field("0.3*(300 - y)", Domain(0, 60, 210, 95), GridSpacing(5, 5),
    ...                              precision=2, curve=CurveSpec(0.5, 0, 90))
"""
from dataclasses import dataclass, field

from typing_extensions import Optional, Union

from py_eulercalc.config import EulerConfig, EulerConfigDict, create_config, get_config
from py_eulercalc.euler import EulerStepper
from py_eulercalc.expression import Expression
from py_eulercalc.field import CurveSpec, DirectionField, Domain, FieldProjector, GridSpacing
from py_eulercalc.field import overlay_curve, sample_field
from py_eulercalc.logger import logger
from py_eulercalc.rounding import check_precision, round_to_precision
from py_eulercalc.step_data import StepTable

__all__ = ('Calculator',)

FormulaEntry = Union[str, Expression]


def _compile(formula: FormulaEntry) -> Expression:
    if isinstance(formula, Expression):
        return formula
    return Expression.compile(formula)


@dataclass
class Calculator:
    """Basic interface for the Euler calculator.

    Attributes:
        config: EulerConfig, a partial EulerConfigDict, or None for the active default.
    """

    config: Optional[Union[EulerConfig, EulerConfigDict]] = field(default=None)
    _config: EulerConfig = field(init=False, repr=False, compare=False)
    _stepper: EulerStepper = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.config is None:
            self._config = get_config()
        elif isinstance(self.config, EulerConfig):
            self._config = self.config
        else:
            self._config = create_config(self.config)
        self._stepper = EulerStepper(self._config)

    def _precision(self, precision: Optional[int]) -> int:
        precision = self._config.cDefaultPrecision if precision is None else int(precision)
        return check_precision(precision)

    def table(self, formula: FormulaEntry, step: float, x0: float, y0: float, x_end: float,
              precision: Optional[int] = None) -> StepTable:
        """Run Euler's method from (x0, y0) to x_end.

        Args:
            formula: f(x, y) as text or a compiled Expression.
            step: Step size.
            x0: Initial x.
            y0: Initial y.
            x_end: Last x to include.
            precision: Decimal digits; defaults to cDefaultPrecision.

        Returns:
            StepTable with one record per step.

        Raises:
            ExpressionError: If the formula does not parse or fails at a visited point.
            NonTerminatingStepError: If the step cannot reach x_end.
            StepLimitError: If reaching x_end takes more than cMaxSteps steps.
            ValueError: If precision is outside 0..MAX_PRECISION.
        """
        expr = _compile(formula)
        precision = self._precision(precision)
        records = self._stepper.run(expr, step, x0, y0, x_end, precision)
        logger.debug(f"Step table for '{expr.formula}': {len(records)} records")
        return StepTable(expr.formula, round_to_precision(step, precision), precision, records)

    def direction_field(self, formula: FormulaEntry, domain: Domain, grid: GridSpacing,
                        precision: Optional[int] = None,
                        curve: Optional[CurveSpec] = None) -> DirectionField:
        """Sample the direction field of f over `domain`, optionally with an Euler curve.

        Args:
            formula: f(x, y) as text or a compiled Expression.
            domain: Region to draw.
            grid: Sample spacing in drawing space.
            precision: Decimal digits; defaults to cDefaultPrecision.
            curve: Step and initial condition of the overlaid curve, None for no curve.

        Returns:
            DirectionField with all segments in drawing space.

        Raises:
            ExpressionError: If the formula does not parse or fails at a sampled point.
            NonTerminatingStepError: If the curve step rounds to zero.
            StepLimitError: If the curve stays inside the domain for cMaxSteps steps.
        """
        expr = _compile(formula)
        precision = self._precision(precision)
        segments = sample_field(expr, domain, grid, precision, self._config)
        curve_segments = ()
        if curve is not None:
            curve_segments = overlay_curve(expr, domain, curve, precision, self._config, self._stepper)
        return DirectionField(
            formula=expr.formula,
            domain=domain,
            grid=grid,
            precision=precision,
            projector=FieldProjector(domain),
            segments=segments,
            curve_spec=curve,
            curve=curve_segments,
        )
