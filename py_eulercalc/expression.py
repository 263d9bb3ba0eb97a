"""Formula evaluation for the right-hand side of y' = f(x, y).

A formula string over the variables `x` and `y` is parsed once with sympy and turned into
a plain Python callable with `lambdify`. Evaluation reads the current values from a small
mutable `EvalContext`, so the stepping loop only updates two attributes between calls.

Syntax:
    - Operators: +  -  *  /  ^ (power, same as **)
    - Functions: sin, cos, tan, exp, log/ln (natural), sqrt, abs, ...
    - Constants: pi, e
    - Multiplication is explicit: 0.3*x, not 0.3x
    - Any other name, a string literal or attribute access is rejected before parsing,
      and the parser namespace holds no builtins

Examples:
    >>> expr = Expression.compile("0.3*(300 - y)")
    >>> ctx = EvalContext(x=0.0, y=350.0)
    >>> bound = expr.bind(ctx)
    >>> bound.evaluate()
    -15.0
    >>> ctx.y = 300.0
    >>> bound.evaluate()
    0.0
"""
import io
import math
import tokenize
from dataclasses import dataclass

import sympy
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations
from typing_extensions import Callable

from py_eulercalc.exceptions import ExpressionError
from py_eulercalc.logger import logger

__all__ = (
    'EvalContext',
    'Expression',
    'BoundExpression',
)

X = sympy.Symbol('x')
Y = sympy.Symbol('y')

TRANSFORMS = standard_transformations + (convert_xor,)

LOCALS = {
    'x': X,
    'y': Y,
    'e': sympy.E,
    'pi': sympy.pi,
    'ln': sympy.log,
    'abs': sympy.Abs,
}

FUNCTIONS = {
    name: getattr(sympy, name) for name in (
        'sin', 'cos', 'tan', 'cot', 'sec', 'csc',
        'asin', 'acos', 'atan', 'acot', 'atan2',
        'sinh', 'cosh', 'tanh', 'asinh', 'acosh', 'atanh',
        'exp', 'log', 'sqrt', 'floor', 'ceiling', 'Abs', 'Min', 'Max',
    )
}

# names the parser transformations emit for numbers and symbols
PARSER_NAMES = {
    'Integer': sympy.Integer,
    'Float': sympy.Float,
    'Rational': sympy.Rational,
    'Symbol': sympy.Symbol,
    'Function': sympy.Function,
}

KNOWN_NAMES = frozenset(LOCALS) | frozenset(FUNCTIONS)


def _global_dict() -> dict:
    """Namespace for parse_expr: no builtins, only the allowed sympy names."""
    return {'__builtins__': {}, **PARSER_NAMES, **FUNCTIONS}


def _check_tokens(formula: str, text: str) -> None:
    """Reject anything but numbers, operators, brackets and known names.

    Raises:
        ExpressionError: On strings, attribute access, keywords or unknown names.
    """
    try:
        tokens = [t for t in tokenize.generate_tokens(io.StringIO(text).readline)
                  if t.type not in (tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER)]
    except (tokenize.TokenError, SyntaxError) as err:
        raise ExpressionError(formula, f"cannot parse ({err})") from err

    unknown_vars, unknown_funcs = set(), set()
    for tok, nxt in zip(tokens, tokens[1:] + [None]):
        if tok.type == tokenize.STRING:
            raise ExpressionError(formula, f"string literals are not allowed: {tok.string}")
        if tok.type == tokenize.OP and tok.string == '.':
            raise ExpressionError(formula, "attribute access is not allowed")
        if tok.type == tokenize.NAME and tok.string not in KNOWN_NAMES:
            if nxt is not None and nxt.string == '(':
                unknown_funcs.add(tok.string)
            else:
                unknown_vars.add(tok.string)
    if unknown_vars:
        raise ExpressionError(formula, f"unknown variables: {', '.join(sorted(unknown_vars))}")
    if unknown_funcs:
        raise ExpressionError(formula, f"unknown functions: {', '.join(sorted(unknown_funcs))}")


@dataclass
class EvalContext:
    """Current values of the formula variables."""
    x: float = 0.0
    y: float = 0.0


class Expression:
    """Compiled formula f(x, y).

    Attributes:
        formula: Source text as given by the user.
        sym: Parsed sympy expression.
    """

    __slots__ = ('formula', 'sym', '_func')

    def __init__(self, formula: str, sym: sympy.Expr, func: Callable[[float, float], float]):
        self.formula = formula
        self.sym = sym
        self._func = func

    @classmethod
    def compile(cls, formula: str) -> 'Expression':
        """Parse `formula` into an evaluatable expression.

        Raises:
            ExpressionError: If the text is not a scalar expression over `x` and `y`.
        """
        text = formula.strip()
        if not text:
            raise ExpressionError(formula, "empty formula")
        if '=' in text or ';' in text or '__' in text:
            raise ExpressionError(formula, "only plain expressions in x and y are allowed")
        _check_tokens(formula, text)
        try:
            sym = parse_expr(text, local_dict=dict(LOCALS), global_dict=_global_dict(),
                             transformations=TRANSFORMS)
        except (SyntaxError, tokenize.TokenError, TypeError, ValueError, NameError, sympy.SympifyError) as err:
            raise ExpressionError(formula, f"cannot parse ({err})") from err

        if not isinstance(sym, sympy.Expr):
            raise ExpressionError(formula, f"not a scalar expression: {sym}")
        if unknown := sym.free_symbols - {X, Y}:
            names = ', '.join(sorted(str(s) for s in unknown))
            raise ExpressionError(formula, f"unknown variables: {names}")
        if undefined := sym.atoms(AppliedUndef):
            names = ', '.join(sorted(str(f.func) for f in undefined))
            raise ExpressionError(formula, f"unknown functions: {names}")

        func = sympy.lambdify((X, Y), sym, modules="math")
        logger.debug(f"Compiled '{formula}' as {sym}")
        return cls(formula, sym, func)

    def __call__(self, x: float, y: float) -> float:
        """Evaluate at (x, y).

        Raises:
            ExpressionError: On arithmetic failure, complex or non-finite result.
        """
        try:
            value = self._func(x, y)
        except (ArithmeticError, ValueError, TypeError, NameError) as err:
            raise ExpressionError(self.formula, str(err) or type(err).__name__, (x, y)) from err
        if isinstance(value, complex):
            raise ExpressionError(self.formula, f"complex result {value}", (x, y))
        value = float(value)
        if not math.isfinite(value):
            raise ExpressionError(self.formula, f"non-finite result {value}", (x, y))
        return value

    def bind(self, context: EvalContext) -> 'BoundExpression':
        return BoundExpression(self, context)

    def __repr__(self) -> str:
        return f"Expression({self.formula!r})"


class BoundExpression:
    """Expression tied to a mutable EvalContext."""

    __slots__ = ('expression', 'context')

    def __init__(self, expression: Expression, context: EvalContext):
        self.expression = expression
        self.context = context

    def evaluate(self) -> float:
        return self.expression(self.context.x, self.context.y)
