"""
Snowflake builder.

Validates construction options, draws the random parameters from an
injected source, and assembles the rotated arms into a single outline.
"""

from paraflake.builder.options import ConfigError, SnowflakeOptions
from paraflake.builder.random_source import RandomSource, make_random_source
from paraflake.builder.snowflake import Snowflake, build_arm, gap_size, points_per_arm

__all__ = [
    "ConfigError",
    "RandomSource",
    "Snowflake",
    "SnowflakeOptions",
    "build_arm",
    "gap_size",
    "make_random_source",
    "points_per_arm",
]
