"""Calculation constants for the Euler stepper and the direction-field renderer.

The configuration system mirrors the usual dataclass/TypedDict pair:
- EulerConfig: dataclass holding every constant with its default
- EulerConfigDict: TypedDict version for partial overrides (e.g. from a TOML table)
- create_config: merge overrides into the defaults
- basic_config / get_config: process-wide default used by Calculator

Configuration Constants:
    cDefaultPrecision: Decimal digits used when a caller does not pass a precision
    cSegmentLength: Length of one direction-field arrow in drawing units
    cGridTolerance: Fraction of a grid step tolerated at the right/top domain edge
    cCurveTolerance: Absolute slack on the curve overlay's bounding-box tests
    cMaxSteps: Largest number of Euler steps a single run may take
    cTikzScale: TikZ picture scale
    cFieldStyle: TikZ style for field segments
    cCurveStyle: TikZ style for the overlaid approximation curve
"""
from dataclasses import dataclass, asdict, fields

from typing_extensions import Optional, TypedDict

from py_eulercalc.rounding import check_precision

__all__ = (
    'EulerConfig',
    'EulerConfigDict',
    'DEFAULT_CONFIG',
    'create_config',
    'basic_config',
    'get_config',
)

cDefaultPrecision: int = 6
cSegmentLength: float = 2.0
cGridTolerance: float = 1e-9  # fraction of one grid step
cCurveTolerance: float = 1e-12
cMaxSteps: int = 10_000_000
cTikzScale: float = 0.12
cFieldStyle: str = "blue!70"
cCurveStyle: str = "red, thick"


@dataclass(frozen=True)
class EulerConfig:
    """Constants shared by the stepper, the field sampler and the formatters.

    Attributes:
        cDefaultPrecision: Rounding precision (decimal digits) when none is given. Defaults to 6.
        cSegmentLength: Length of each field arrow in drawing-space units. Defaults to 2.0.
        cGridTolerance: Fraction of a grid step by which floating accumulation may undershoot
                        the domain edge and still have the edge sampled. Defaults to 1e-9.
        cCurveTolerance: Slack applied to the curve overlay's y-range and x_max tests.
                         Defaults to 1e-12.
        cMaxSteps: Fixed-endpoint runs predicted to take more steps are rejected before
                   the loop starts; bounded runs stop with an error on reaching it.
                   Defaults to 10_000_000.
        cTikzScale: `scale=` option of the generated tikzpicture. Defaults to 0.12.
        cFieldStyle: TikZ draw style for field segments. Defaults to "blue!70".
        cCurveStyle: TikZ draw style for the curve overlay. Defaults to "red, thick".
    """

    cDefaultPrecision: int = cDefaultPrecision
    cSegmentLength: float = cSegmentLength
    cGridTolerance: float = cGridTolerance
    cCurveTolerance: float = cCurveTolerance
    cMaxSteps: int = cMaxSteps
    cTikzScale: float = cTikzScale
    cFieldStyle: str = cFieldStyle
    cCurveStyle: str = cCurveStyle


#: Default configuration instance
DEFAULT_CONFIG: EulerConfig = EulerConfig()


class EulerConfigDict(TypedDict, total=False):
    """Partial configuration; unspecified fields fall back to DEFAULT_CONFIG."""

    cDefaultPrecision: Optional[int]
    cSegmentLength: Optional[float]
    cGridTolerance: Optional[float]
    cCurveTolerance: Optional[float]
    cMaxSteps: Optional[int]
    cTikzScale: Optional[float]
    cFieldStyle: Optional[str]
    cCurveStyle: Optional[str]


def create_config(interface_config: Optional[EulerConfigDict] = None) -> EulerConfig:
    """Create EulerConfig from optional dictionary overrides.

    Args:
        interface_config: Fields to override. None returns the defaults.

    Returns:
        EulerConfig with merged values.

    Raises:
        ValueError: If interface_config names a field EulerConfig does not have.

    Examples:
        >>> create_config({'cSegmentLength': 1.0}).cSegmentLength
        1.0
    """
    config = asdict(DEFAULT_CONFIG)
    if interface_config is not None and isinstance(interface_config, dict):
        known = {f.name for f in fields(EulerConfig)}
        if unknown := set(interface_config) - known:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        config.update({k: v for k, v in interface_config.items() if v is not None})
    check_precision(config['cDefaultPrecision'])
    if config['cSegmentLength'] <= 0:
        raise ValueError("cSegmentLength must be positive")
    return EulerConfig(**config)


_PYEC_CONFIG = DEFAULT_CONFIG


def basic_config(config: EulerConfig) -> None:
    global _PYEC_CONFIG
    _PYEC_CONFIG = config


def get_config() -> EulerConfig:
    return _PYEC_CONFIG
