import math

import pytest

from py_eulercalc import EvalContext, Expression, ExpressionError


class TestCompile:

    @pytest.mark.parametrize(
        "formula,x,y,expected",
        [
            ("0.3*(300 - y)", 0.0, 350.0, -15.0),
            ("x^2", 3.0, 0.0, 9.0),
            ("x**2 + y", 2.0, 1.0, 5.0),
            ("ln(e)", 0.0, 0.0, 1.0),
            ("sin(pi/2)", 0.0, 0.0, 1.0),
            ("abs(x - y)", 1.0, 4.0, 3.0),
            ("5", 10.0, 10.0, 5.0),
            ("x/2", 3.0, 0.0, 1.5),
        ],
    )
    def test_evaluate(self, formula, x, y, expected):
        assert Expression.compile(formula)(x, y) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "formula",
        ["", "   ", "(x + y", "x = 1", "x; y", "z + 1", "foo(x)", "x < y", "__import__('os')"],
    )
    def test_rejected(self, formula):
        with pytest.raises(ExpressionError) as exc_info:
            Expression.compile(formula)
        assert exc_info.value.formula == formula
        assert exc_info.value.point is None

    def test_error_message_has_formula(self):
        with pytest.raises(ExpressionError, match="z \\+ 1"):
            Expression.compile("z + 1")


class TestEvaluate:

    def test_bound_context_reflects_mutation(self, cooling):
        ctx = EvalContext(x=0.0, y=350.0)
        bound = cooling.bind(ctx)
        assert bound.evaluate() == pytest.approx(-15.0)
        ctx.y = 300.0
        assert bound.evaluate() == pytest.approx(0.0)
        ctx.y = 250.0
        assert bound.evaluate() == pytest.approx(15.0)

    @pytest.mark.parametrize(
        "formula,x,y",
        [
            ("1/x", 0.0, 1.0),
            ("sqrt(y)", 0.0, -1.0),
            ("log(x)", 0.0, 1.0),
            ("exp(x)", 1000.0, 0.0),
        ],
    )
    def test_failure_carries_point(self, formula, x, y):
        expr = Expression.compile(formula)
        with pytest.raises(ExpressionError) as exc_info:
            expr(x, y)
        assert exc_info.value.point == (x, y)
        assert exc_info.value.formula == formula

    def test_result_is_float(self):
        value = Expression.compile("2")(0.0, 0.0)
        assert isinstance(value, float)
        assert math.isfinite(value)


class TestCodeInjection:

    @pytest.mark.parametrize(
        "template",
        [
            "open({path!r}, 'w').close() or x",
            "eval(\"open({path!r}, 'w')\") or x",
            "exec(\"open({path!r}, 'w')\") or x",
            "x if open({path!r}, 'w') else y",
        ],
    )
    def test_builtins_are_not_reachable(self, template, tmp_path):
        target = tmp_path / "created"
        with pytest.raises(ExpressionError):
            Expression.compile(template.format(path=str(target)))
        assert not target.exists()

    @pytest.mark.parametrize(
        "formula",
        [
            "chr(65)",
            "x.func",
            "sin.__module__",
            "Symbol('z')",
            "lambda: 1",
            "x or y",
            "Integer(1)",
        ],
    )
    def test_rejected_names(self, formula):
        with pytest.raises(ExpressionError):
            Expression.compile(formula)

    @pytest.mark.parametrize(
        "formula,expected",
        [
            ("chr(65)", "unknown functions: chr"),
            ("q*x", "unknown variables: q"),
        ],
    )
    def test_reason(self, formula, expected):
        with pytest.raises(ExpressionError) as exc_info:
            Expression.compile(formula)
        assert exc_info.value.reason == expected

    @pytest.mark.parametrize(
        "formula,x,y,expected",
        [
            ("atan2(y, x)", 1.0, 1.0, math.pi / 4),
            ("Max(x, y) - Min(x, y)", 2.0, 5.0, 3.0),
            ("0.5e1*x", 2.0, 0.0, 10.0),
            ("cosh(0) + floor(y)", 0.0, 2.7, 3.0),
        ],
    )
    def test_allowed_functions(self, formula, x, y, expected):
        assert Expression.compile(formula)(x, y) == pytest.approx(expected)
