import argparse
import logging
import sys
from importlib import metadata

from py_eulercalc import basicConfig, logger
from py_eulercalc.exceptions import DegenerateDomainError, ExpressionError, NonTerminatingStepError, StepLimitError
from py_eulercalc.field import CurveSpec, Domain, GridSpacing
from py_eulercalc.formatters import TableFormat, format_table, format_tikz
from py_eulercalc.interface import Calculator
from py_eulercalc.rounding import MAX_PRECISION

version = metadata.metadata("py_eulercalc")['Version']

MODE_DFIELD = 'dfield'
MODE_DFIELD_CURVE = 'dfield_curve'

USAGE_EPILOG = """\
modes:
  table:        FORMULA STEP X0 Y0 X_END PRECISION [-l | -c | -cr]
  field:        FORMULA XMIN YMIN XMAX YMAX XGRID YGRID PRECISION -df
  field+curve:  FORMULA XMIN YMIN XMAX YMAX XGRID YGRID H [XINIT YINIT] PRECISION -dfc

examples:
  pyec "0.3*(300 - y)" 0.1 0 350 10 6
  pyec "0.3*(300 - y)" 0.1 0 350 10 6 -l > table.tex
  pyec "0.3*(300 - y)" 0 60 210 95 5 5 2 -df
  pyec "0.3*(300 - y)" 0 60 210 95 5 5 0.5 0 90 2 -dfc

Multiplication is explicit (0.3*x, not 0.3x). A formula starting with '-' is accepted as the
first argument; elsewhere put `--` before it.
"""


def add_output_group(parser):
    output = parser.add_argument_group('Output', 'Output format (default: plain table)')
    modes = output.add_mutually_exclusive_group()
    modes.add_argument("-l", "--latex", dest="mode", action="store_const", const=TableFormat.LATEX,
                       help="LaTeX longtable document")
    modes.add_argument("-c", "--csv", dest="mode", action="store_const", const=TableFormat.CSV,
                       help="CSV table")
    modes.add_argument("-cr", "--csv-segments", dest="mode", action="store_const",
                       const=TableFormat.CSV_SEGMENTS, help="CSV line segments x0,y0,x1,y1")
    modes.add_argument("-df", "--dfield", dest="mode", action="store_const", const=MODE_DFIELD,
                       help="TikZ direction field")
    modes.add_argument("-dfc", "--dfield-curve", dest="mode", action="store_const", const=MODE_DFIELD_CURVE,
                       help="TikZ direction field with Euler curve")


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog='pyec',
        description="Euler's method tables and direction fields for y' = f(x, y)",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('formula', help="Right-hand side f(x, y), e.g. \"0.3*(300 - y)\"")
    parser.add_argument('values', nargs='+', help="Numeric parameters of the selected mode")
    parser.add_argument("-v", "--version", action='version',
                        version=f'pyec v{version}', help="Show version")
    parser.add_argument("--debug", action="store_true", help="Enable debug messages")
    parser.add_argument("--config", action="store", help="TOML configuration file")

    add_output_group(parser)
    return parser


def _parse_numbers(parser, values, counts, mode_name):
    if len(values) not in counts:
        expected = ' or '.join(str(c) for c in counts)
        parser.error(f"{mode_name} mode takes {expected} numeric values, got {len(values)}")
    try:
        numbers = [float(v) for v in values[:-1]]
        precision = int(values[-1])
    except ValueError as exc:
        parser.error(f"invalid numeric value: {exc}")
    if not 0 <= precision <= MAX_PRECISION:
        parser.error(f"precision must be in 0..{MAX_PRECISION}")
    return numbers, precision


def run(argv, parser) -> str:
    calc = Calculator()
    formula = argv.formula.strip()
    if argv.mode == MODE_DFIELD:
        numbers, precision = _parse_numbers(parser, argv.values, (7,), "-df")
        x_min, y_min, x_max, y_max, x_grid, y_grid = numbers
        field = calc.direction_field(formula, Domain(x_min, y_min, x_max, y_max),
                                     GridSpacing(x_grid, y_grid), precision)
        return format_tikz(field)
    if argv.mode == MODE_DFIELD_CURVE:
        numbers, precision = _parse_numbers(parser, argv.values, (8, 10), "-dfc")
        x_min, y_min, x_max, y_max, x_grid, y_grid, h, *initial = numbers
        curve = CurveSpec(h, *initial)
        field = calc.direction_field(formula, Domain(x_min, y_min, x_max, y_max),
                                     GridSpacing(x_grid, y_grid), precision, curve)
        return format_tikz(field)

    numbers, precision = _parse_numbers(parser, argv.values, (5,), "table")
    step, x0, y0, x_end = numbers
    table = calc.table(formula, step, x0, y0, x_end, precision)
    return format_table(table, argv.mode or TableFormat.PLAIN)


def _protect_formula(parser, args):
    """Keep a leading formula such as "-y" from being read as an option."""
    args = list(sys.argv[1:] if args is None else args)
    options = {s for action in parser._actions for s in action.option_strings}
    if args and args[0].startswith('-') and not args[0].startswith('--') and args[0] not in options:
        args[0] = ' ' + args[0]
    return args


def main(args=None) -> int:
    parser = get_arg_parser()
    argv = parser.parse_args(_protect_formula(parser, args))

    if argv.debug:
        logger.setLevel(logging.DEBUG)
        logger.info("Debug messages enabled")

    try:
        if argv.config:
            basicConfig(argv.config)
        sys.stdout.write(run(argv, parser))
    except (ExpressionError, DegenerateDomainError, NonTerminatingStepError, StepLimitError) as exc:
        logger.error(exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error(f"Configuration error: {exc}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
