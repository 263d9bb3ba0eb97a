"""Explicit Euler method tables and direction fields for y' = f(x, y)."""

import importlib.metadata

__version__ = importlib.metadata.version("py_eulercalc")

# Standard library imports
import os
import sys

# Third-party imports
from typing_extensions import Optional

# Local imports
from .config import EulerConfigDict, basic_config, create_config
from .logger import logger as log

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Load configuration from a .pyec.toml file.

    Args:
        filepath: Path to configuration file. If None, searches for .pyec.toml or pyec.toml
        suppress_warnings: If True, suppress warning messages
    """
    def find_pyec_toml(start_dir: str = os.getcwd()) -> Optional[str]:
        """Search for .pyec.toml / pyec.toml from start_dir up to the filesystem root."""
        current_dir = os.path.abspath(start_dir)
        while True:
            pyec_paths = [
                os.path.join(current_dir, '.pyec.toml'),
                os.path.join(current_dir, 'pyec.toml'),
            ]
            for pyec_path in pyec_paths:
                if os.path.exists(pyec_path):
                    return os.path.abspath(pyec_path)

            parent_dir = os.path.dirname(current_dir)
            if parent_dir == current_dir:
                return None
            current_dir = parent_dir

    if filepath is None:
        filepath = find_pyec_toml()

    if filepath is not None:
        log.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")

        with open(filepath, "rb") as fp:
            _config = tomllib.load(fp)

            if (_pyec := _config.get('pyec')) is not None:
                basic_config(create_config(_pyec))
            elif not suppress_warnings:
                log.warning("Config has no `pyec` section")

    log.debug("Calculator configuration load success")


def _basic_config(filename: Optional[str] = None,
                  config: Optional[EulerConfigDict] = None,
                  suppress_warnings: bool = False) -> None:
    """Set the process-wide configuration from a TOML file or a mapping.

    Args:
        filename: Configuration file path
        config: Partial configuration mapping
        suppress_warnings: If True, suppress warning messages

    Raises:
        ValueError: If both filename and config are provided, or config has unknown keys
    """
    if filename and config:
        raise ValueError("Can't use config mapping and config file at same time")
    if not filename and config:
        basic_config(create_config(config))
    else:
        _load_config(filename, suppress_warnings)


def _reset_config() -> None:
    """Restore the built-in defaults."""
    basic_config(create_config())


basicConfig = _basic_config
resetConfig = _reset_config

basicConfig()


from .config import EulerConfig, DEFAULT_CONFIG, get_config
from .exceptions import ExpressionError, DegenerateDomainError, NonTerminatingStepError, StepLimitError
from .expression import EvalContext, Expression, BoundExpression
from .euler import EulerStepper
from .field import (Domain, GridSpacing, FieldProjector, CurveSpec, DirectionField,
                    sample_field, overlay_curve)
from .formatters import (TableFormat, format_plain, format_latex, format_csv, format_csv_segments,
                         format_table, format_tikz)
from .interface import Calculator
from .logger import logger, enable_file_logging, disable_file_logging
from .rounding import round_to_precision
from .step_data import StepRecord, Segment, StepTable

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__", "__path__",
    # Skip imported modules
    "tomllib", "sys", "os", "importlib",
    # Skip subpackages and private/internal symbols
    "config", "exceptions", "expression", "euler", "field", "formatters", "interface",
    "rounding", "step_data", "log", "Optional",
    "_load_config", "_basic_config", "_reset_config",
}
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
