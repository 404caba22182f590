"""
Export module.

Consumers of a finished outline: drawing surfaces (SVG, matplotlib
preview) and G-code output (bare motion lines or a full program).
"""

from paraflake.export.surface import DrawingSurface, SvgPathSurface, SvgStyle
from paraflake.export.gcode import GCodeError, GCodeExporter, format_motion_lines

__all__ = [
    "DrawingSurface",
    "GCodeError",
    "GCodeExporter",
    "SvgPathSurface",
    "SvgStyle",
    "format_motion_lines",
]
