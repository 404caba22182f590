"""
paraflake -- parametric snowflake outlines for plotters and printers.

Builds a spiky, n-fold symmetric snowflake outline from a handful of
parameters and exports it as drawing calls, G-code or SVG.

Subpackages:
    geometry: Point and Polyline primitives
    builder: Option validation and snowflake construction
    export: Drawing surfaces and G-code output
    configs: YAML configuration loading and validation
    utils: Filesystem and logging helpers
    scripts: Command-line entry points
"""

from paraflake.builder import ConfigError, Snowflake, SnowflakeOptions
from paraflake.geometry import Point, Polyline

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Point",
    "Polyline",
    "Snowflake",
    "SnowflakeOptions",
    "__version__",
]
