"""py_eulercalc exception types"""

from py_eulercalc.exceptions.exceptions import (
    ExpressionError, DegenerateDomainError, NonTerminatingStepError, StepLimitError)

__all__ = (
    'ExpressionError',
    'DegenerateDomainError',
    'NonTerminatingStepError',
    'StepLimitError',
)
