"""py_eulercalc exception types"""
from typing_extensions import Optional, Tuple

__all__ = (
    'ExpressionError',
    'DegenerateDomainError',
    'NonTerminatingStepError',
    'StepLimitError',
)


class ExpressionError(ValueError):
    """
    Formula failed to parse, or failed to evaluate at some point.
    Contains:
    - The offending formula text
    - The (x, y) point of a failed evaluation, None for parse failures
    - The underlying reason
    """

    def __init__(self, formula: str, reason: str, point: Optional[Tuple[float, float]] = None):
        self.formula: str = formula
        self.reason: str = reason
        self.point: Optional[Tuple[float, float]] = point
        message = f"Error in expression '{formula}': {reason}"
        if point is not None:
            message += f' at x={point[0]}, y={point[1]}'
        super().__init__(message)


class DegenerateDomainError(ValueError):
    """Domain bounds do not span a proper rectangle (non-finite, or max <= min on an axis)"""


class NonTerminatingStepError(ValueError):
    """
    Step would never reach its target.
    Contains:
    - The offending step
    - The span it was supposed to cover, if any
    """

    def __init__(self, step: float, span: Optional[float] = None, reason: str = ''):
        self.step: float = step
        self.span: Optional[float] = span
        message = f'Step {step} does not terminate'
        if span is not None:
            message += f' over span {span}'
        if reason:
            message += f' ({reason})'
        super().__init__(message)


class StepLimitError(ValueError):
    """
    Run would take, or has taken, more steps than the configured cMaxSteps.
    Contains:
    - The step in use
    - The configured limit
    - The predicted step count, None when the limit was hit while stepping
    """

    def __init__(self, step: float, limit: int, steps: Optional[int] = None):
        self.step: float = step
        self.limit: int = limit
        self.steps: Optional[int] = steps
        if steps is not None:
            message = f'Run of {steps} steps at step {step} exceeds cMaxSteps={limit}'
        else:
            message = f'Run at step {step} reached cMaxSteps={limit}'
        super().__init__(message)
