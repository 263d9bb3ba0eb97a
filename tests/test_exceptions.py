import pytest

from py_eulercalc import (Calculator, DegenerateDomainError, Domain, ExpressionError, GridSpacing,
                          NonTerminatingStepError, StepLimitError)


class TestExpressionError:

    def test_parse_failure(self):
        err = ExpressionError("y +", "cannot parse")
        assert err.formula == "y +"
        assert err.point is None
        assert str(err) == "Error in expression 'y +': cannot parse"

    def test_evaluation_failure(self):
        err = ExpressionError("1/x", "division by zero", (0.0, 1.0))
        assert err.point == (0.0, 1.0)
        assert str(err) == "Error in expression '1/x': division by zero at x=0.0, y=1.0"

    def test_raised_with_point(self):
        with pytest.raises(ExpressionError) as exc:
            Calculator().table("1/(x - 0.5)", 0.25, 0, 1, 1, 2)
        assert exc.value.point[0] == 0.5

    def test_is_value_error(self):
        assert issubclass(ExpressionError, ValueError)


class TestNonTerminatingStepError:

    def test_message(self):
        err = NonTerminatingStepError(0.0, 1.0, "step rounds to zero")
        assert err.step == 0.0
        assert err.span == 1.0
        assert str(err) == "Step 0.0 does not terminate over span 1.0 (step rounds to zero)"

    def test_bare_message(self):
        assert str(NonTerminatingStepError(-1)) == "Step -1 does not terminate"

    def test_bad_grid(self):
        with pytest.raises(NonTerminatingStepError):
            GridSpacing(0, 5)
        with pytest.raises(NonTerminatingStepError):
            GridSpacing(5, float('nan'))


class TestDegenerateDomainError:

    @pytest.mark.parametrize(
        "bounds",
        [
            (0, 0, 0, 1),
            (0, 1, 1, 1),
            (1, 0, 0, 1),
            (0, 0, float('inf'), 1),
            (float('nan'), 0, 1, 1),
        ],
    )
    def test_rejected(self, bounds):
        with pytest.raises(DegenerateDomainError):
            Domain(*bounds)


class TestStepLimitError:

    def test_predicted(self):
        err = StepLimitError(0.1, 10, 101)
        assert (err.step, err.limit, err.steps) == (0.1, 10, 101)
        assert str(err) == "Run of 101 steps at step 0.1 exceeds cMaxSteps=10"

    def test_reached(self):
        err = StepLimitError(1.0, 20)
        assert err.steps is None
        assert str(err) == "Run at step 1.0 reached cMaxSteps=20"

    def test_is_not_non_terminating(self):
        assert not issubclass(StepLimitError, NonTerminatingStepError)
        assert issubclass(StepLimitError, ValueError)
