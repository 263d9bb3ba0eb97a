"""Direction-field projection, sampling and curve overlay.

Modules:
    - projector: Domain, GridSpacing and the aspect-normalising FieldProjector
    - sampler: slope segments over a grid
    - overlay: bounded Euler polyline in the same drawing space
    - result: DirectionField, the combined result
"""

from .projector import *
from .sampler import *
from .overlay import *
from .result import *

__all__ = (
    'Domain',
    'GridSpacing',
    'FieldProjector',
    'grid_points',
    'sample_field',
    'CurveSpec',
    'overlay_curve',
    'DirectionField',
)
