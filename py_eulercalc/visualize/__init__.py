# pylint: skip-file

from .plot import (
    show_plot,
    step_table_as_plot,
    direction_field_as_plot,
)
from .dataframe import (
    step_table_as_dataframe,
)

__all__ = (
    'show_plot',
    'step_table_as_plot',
    'direction_field_as_plot',
    'step_table_as_dataframe',
)
