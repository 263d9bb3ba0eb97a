"""Step table export to pandas DataFrame.

Integration:
    This module is used by the StepTable.dataframe() method.

Typical Usage:
    ```python
    from py_eulercalc import Calculator
    from py_eulercalc.visualize.dataframe import step_table_as_dataframe

    table = Calculator().table("0.3*(300 - y)", 0.1, 0, 350, 10, 6)
    df = step_table_as_dataframe(table)
    print(df.describe())
    df.to_excel('euler.xlsx')
    ```

Dependencies:
    This module requires pandas as an optional dependency. Install via:
    pip install py_eulercalc[visualize]
"""

# pylint: skip-file
# Standard library imports
import warnings

# Local imports
from py_eulercalc.formatters import fixed
from py_eulercalc.step_data import StepRecord, StepTable

# Handle optional pandas dependency with graceful degradation
try:
    from pandas import DataFrame
except ImportError as error:
    warnings.warn("Install pandas to convert step tables to pandas.DataFrame", UserWarning)
    raise error

__all__ = (
    'step_table_as_dataframe',
)


def step_table_as_dataframe(table: StepTable, formatted: bool = False) -> DataFrame:
    """Convert StepTable records to a pandas DataFrame.

    Args:
        table: Result of a table run.
        formatted: False for float columns; True for fixed-point strings at the table precision.

    Returns:
        DataFrame with columns x, y, yp, dy and one row per step.
    """
    col_names = list(StepRecord._fields)
    if formatted:
        rows = [[fixed(v, table.precision) for v in rec] for rec in table]
    else:
        rows = [list(rec) for rec in table]
    return DataFrame(rows, columns=col_names)
