import math

import pytest

from py_eulercalc import (Calculator, CurveSpec, DirectionField, Domain, ExpressionError, GridSpacing,
                          NonTerminatingStepError, StepTable, create_config)


class TestCalculatorTable:

    def test_table_from_text(self, calc):
        table = calc.table("0.3*(300 - y)", 0.1, 0, 350, 10, 6)
        assert isinstance(table, StepTable)
        assert table.formula == "0.3*(300 - y)"
        assert table.step == pytest.approx(0.1)
        assert table.precision == 6
        assert len(table) == 101
        assert tuple(table[0]) == (0.0, 350.0, -15.0, -1.5)

    def test_table_from_expression(self, calc, cooling):
        assert calc.table(cooling, 0.1, 0, 350, 1, 6)[-1].x == pytest.approx(1.0)

    def test_default_precision(self, calc):
        assert calc.table("x", 0.5, 0, 0, 1).precision == 6

    def test_default_precision_from_dict(self):
        calc = Calculator({'cDefaultPrecision': 2})
        table = calc.table("y/3", 1, 0, 1, 1)
        assert table.precision == 2
        assert table[1].y == pytest.approx(1.33)

    def test_config_instance(self):
        config = create_config({'cDefaultPrecision': 1})
        assert Calculator(config).table("1", 1, 0, 0, 1).precision == 1

    def test_negative_precision(self, calc):
        with pytest.raises(ValueError):
            calc.table("x", 0.1, 0, 0, 1, -1)

    def test_bad_formula(self, calc):
        with pytest.raises(ExpressionError):
            calc.table("y +", 0.1, 0, 0, 1, 2)

    def test_zero_step(self, calc):
        with pytest.raises(NonTerminatingStepError):
            calc.table("y", 0.0001, 0, 1, 1, 2)

    def test_segments(self, calc):
        segments = calc.table("0.3*(300 - y)", 0.1, 0, 350, 0.2, 6).segments()
        assert len(segments) == 2
        assert tuple(segments[0]) == (0.0, 350.0, 0.1, 348.5)


class TestCalculatorField:

    def test_direction_field(self, calc):
        field = calc.direction_field("0.3*(300 - y)", Domain(0, 60, 210, 95), GridSpacing(5, 5), 2)
        assert isinstance(field, DirectionField)
        assert len(field.segments) == 43 * 43
        assert field.curve == ()
        assert field.curve_points() == []
        assert field.projector.y_top == pytest.approx(270)

    def test_direction_field_with_curve(self, calc, relaxing):
        field = calc.direction_field(relaxing, Domain(0, 60, 210, 95), GridSpacing(5, 5), 2,
                                     CurveSpec(1, 0, 90))
        assert field.curve_spec == CurveSpec(1, 0, 90)
        assert len(field.curve) == 210
        points = field.curve_points()
        assert len(points) == 211
        assert points[0] == pytest.approx((0.0, 240.0))

    def test_curve_default_initial_point(self, calc):
        field = calc.direction_field("0", Domain(0, 60, 10, 95), GridSpacing(5, 5), 2, CurveSpec(1))
        assert field.curve_points()[0] == pytest.approx((0.0, 60.0))
        assert len(field.curve) == 10


class TestCalculatorLimits:

    def test_precision_too_large(self, calc):
        with pytest.raises(ValueError):
            calc.table("1", 0.5, 0, 1, 1, 400)

    def test_large_slope(self, calc):
        table = calc.table("exp(x)", 0.5, 700, 1, 701, 6)
        assert len(table) == 3
        assert table[0].dy == pytest.approx(0.5 * math.exp(700))

    def test_injected_code_is_rejected(self, calc, tmp_path):
        target = tmp_path / "created"
        with pytest.raises(ExpressionError):
            calc.table(f"open({str(target)!r}, 'w').close() or x", 1, 0, 0, 1, 2)
        assert not target.exists()
