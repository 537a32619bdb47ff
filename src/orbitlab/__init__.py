"""OrbitLab - procedurally generated geometric GIF animations."""

__version__: str = "0.1.0"

# Public re-exports for convenience ---------------------------------------------------

from .coordinates import (
    Coordinate,
    SegmentRounding,
    circle_orbit,
    polygon_orbit,
    rotate_phase,
    square_orbit,
)
from .error_handling import (
    ConfigurationError,
    EncodingError,
    OrbitLabError,
    RenderError,
    StepOutOfRangeError,
)
from .palette import DEFAULT_PALETTE, Color, Palette
from .patterns import CompositePattern, PaintOrder, Pattern, PatternEvaluator
from .rasterizer import Frame, render
from .sequence import FrameSequence, assemble_sequence
from .shapes import Circle, Cross, EqualArmedCross, HitResult, LineSegment, between_lines
