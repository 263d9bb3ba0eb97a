import pytest

from py_eulercalc import (CurveSpec, Domain, GridSpacing, TableFormat, create_config, format_csv,
                          format_csv_segments, format_latex, format_plain, format_table, format_tikz)
from py_eulercalc.formatters import fixed


class TestFixed:

    @pytest.mark.parametrize(
        "value,precision,expected",
        [
            (2.5, 0, "3"),
            (-0.0001, 2, "0.00"),
            (348.5, 6, "348.500000"),
            (-1.455, 3, "-1.455"),
            (0.125, 2, "0.13"),
        ],
    )
    def test_fixed(self, value, precision, expected):
        assert fixed(value, precision) == expected


class TestTableFormats:

    @pytest.fixture(autouse=True)
    def setup_method(self, calc, cooling):
        self.table = calc.table(cooling, 0.1, 0, 350, 0.2, 6)

    def test_plain(self):
        lines = format_plain(self.table).splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("n |")
        assert lines[1] == " 0| 0.000000 | 350.000000 | -15.000000 | -1.500000 "
        assert len({len(line) for line in lines}) == 1

    def test_plain_wide_index(self, calc, cooling):
        lines = format_plain(calc.table(cooling, 0.1, 0, 350, 10, 2)).splitlines()
        assert lines[0].startswith(" n |")
        assert lines[1].startswith("  0|")
        assert lines[-1].startswith("100|")

    def test_csv(self):
        lines = format_csv(self.table).splitlines()
        assert lines[0] == "x,y,y',Δy"
        assert lines[1] == "0.000000,350.000000,-15.000000,-1.500000"
        assert lines[2] == "0.100000,348.500000,-14.550000,-1.455000"
        assert len(lines) == 4

    def test_csv_segments(self):
        lines = format_csv_segments(self.table).splitlines()
        assert lines[0] == "x0,y0,x1,y1"
        assert lines[1] == "0.000000,350.000000,0.100000,348.500000"
        assert len(lines) == 3

    def test_latex(self):
        text = format_latex(self.table)
        assert text.startswith("\\documentclass{article}\n\\usepackage[margin=1in]{geometry}")
        assert "\\begin{longtable}{|c|c|c|c|c|}" in text
        assert "    n & x & y & y' & $\\Delta$y \\\\" in text
        assert "    0 & 0.000000 & 350.000000 & -15.000000 & -1.500000 \\\\" in text
        assert text.count("\\hline") == 5
        assert text.endswith("\\end{document}\n")

    @pytest.mark.parametrize(
        "fmt,formatter",
        [
            (TableFormat.PLAIN, format_plain),
            (TableFormat.LATEX, format_latex),
            (TableFormat.CSV, format_csv),
            (TableFormat.CSV_SEGMENTS, format_csv_segments),
        ],
    )
    def test_dispatch(self, fmt, formatter):
        assert format_table(self.table, fmt) == formatter(self.table)


class TestTikz:

    @pytest.fixture(autouse=True)
    def setup_method(self):
        self.domain = Domain(0, 60, 210, 95)
        self.grid = GridSpacing(5, 5)

    def test_field_only(self, calc, cooling):
        text = format_tikz(calc.direction_field(cooling, self.domain, self.grid, 2))
        assert text.startswith("\\begin{center}\n\\resizebox{\\linewidth}{!}{%\n")
        assert "\\begin{tikzpicture}[scale=0.12]" in text
        assert "\\draw[->] (0.00,60.00) -- (210.00,60.00) node[right] {$t$};" in text
        assert "\\draw[->] (0.00,60.00) -- (0.00,270.00) node[above] {$y$};" in text
        assert text.count("\\draw[blue!70]") == 43 * 43
        assert "plot coordinates" not in text
        assert text.endswith("\\end{tikzpicture}%\n}\n\\end{center}\n")

    def test_with_curve(self, calc, relaxing):
        text = format_tikz(calc.direction_field(relaxing, self.domain, self.grid, 2, CurveSpec(1, 0, 90)))
        assert text.count("\\draw[red, thick] plot coordinates {") == 1
        assert "plot coordinates { (0.00,240.00) (1.00,234.00)" in text
        assert "(210.00," in text.split("plot coordinates")[1]

    def test_curve_outside_is_omitted(self, calc, relaxing):
        text = format_tikz(calc.direction_field(relaxing, self.domain, self.grid, 2, CurveSpec(1, 0, 120)))
        assert "plot coordinates" not in text

    def test_styles_from_config(self, calc, relaxing):
        field = calc.direction_field(relaxing, self.domain, self.grid, 2, CurveSpec(1, 0, 90))
        config = create_config({'cFieldStyle': 'gray', 'cCurveStyle': 'black', 'cTikzScale': 0.5})
        text = format_tikz(field, config)
        assert "\\draw[gray]" in text
        assert "\\draw[black] plot coordinates" in text
        assert "[scale=0.5]" in text
