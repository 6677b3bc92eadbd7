"""
Thumbnail Layout Engine Modules
"""

from .auto_fit import AutoFitOptions, FitResult, auto_fit_text
from .contrast import ContrastEngine, contrast_ratio, relative_luminance
from .layout import LayoutEngine, TextLayoutRequest, TextStyle
from .logo_grid import align_logos_to_grid, calculate_equal_spacing
from .logo_sizer import calculate_logo_size, calculate_multiple_logo_sizes
from .position_scorer import PositionScorer
from .safe_zones import Canvas, Rect, SafeZoneRegistry
from .validator import PlacementElement, ValidationResult, validate_placement

__all__ = [
    "AutoFitOptions",
    "FitResult",
    "auto_fit_text",
    "ContrastEngine",
    "contrast_ratio",
    "relative_luminance",
    "LayoutEngine",
    "TextLayoutRequest",
    "TextStyle",
    "align_logos_to_grid",
    "calculate_equal_spacing",
    "calculate_logo_size",
    "calculate_multiple_logo_sizes",
    "PositionScorer",
    "Canvas",
    "Rect",
    "SafeZoneRegistry",
    "PlacementElement",
    "ValidationResult",
    "validate_placement",
]
