#!/usr/bin/env python3
"""
Generate Snowflake Script.

Build one snowflake from a config file plus command-line overrides and
write it as motion lines, a G-code program, or SVG.

Usage:
    paraflake --format gcode -o flake.gcode
    paraflake --seed 7 --arms 8 --spikes 4 --format svg -o flake.svg
    paraflake --config my.yaml --preview flake.png
    python -m paraflake.scripts.generate --format lines

Formats:
    lines   one "G1 X.. Y.." line per vertex (default)
    gcode   complete program (header, pen up/down, feeds, footer)
    svg     standalone SVG document
"""

from __future__ import annotations

import argparse
import logging
import sys

from paraflake.builder.options import ConfigError
from paraflake.builder.random_source import make_random_source
from paraflake.builder.snowflake import Snowflake
from paraflake.configs.loader import load_config
from paraflake.export.gcode import GCodeError, GCodeExporter, format_motion_lines
from paraflake.export.surface import SvgPathSurface
from paraflake.utils import fs
from paraflake.utils.logging_config import push_context, setup_logging

logger = logging.getLogger(__name__)

FORMATS = ("lines", "gcode", "svg")


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paraflake",
        description="Generate a parametric snowflake outline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Available formats: {', '.join(FORMATS)}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path (default: bundled snowflake.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for spike count and lengths",
    )

    # Shape overrides
    shape = parser.add_argument_group("shape overrides")
    shape.add_argument("--arms", type=int, help="Number of arms")
    shape.add_argument("--length", type=float, help="Arm length")
    shape.add_argument("--thickness", type=float, help="Arm thickness")
    shape.add_argument("--spikes", type=int, help="Spikes per half-arm")
    shape.add_argument("--spacer", type=float, help="Spacer between spike segments")
    shape.add_argument("--angle", type=float, help="Spike angle in degrees")

    # Output
    parser.add_argument(
        "--format",
        "-f",
        choices=FORMATS,
        default="lines",
        help="Output format (default: lines)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        help="Also render a PNG preview to this path",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Override the configured log level",
    )
    return parser


def render(flake: Snowflake, fmt: str, exporter: GCodeExporter) -> str:
    """Serialise *flake* in the requested format."""
    if fmt == "lines":
        return format_motion_lines(flake.path)
    if fmt == "gcode":
        opts = flake.options
        comment = (
            f"arms={opts.num_arms} length={opts.arm_length:g} "
            f"thickness={opts.arm_thickness:g} spikes={opts.num_spikes}"
        )
        return exporter.generate(flake.path, comment=comment)
    surface = SvgPathSurface()
    flake.draw(surface)
    return surface.to_svg(title="paraflake snowflake")


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    log_cfg = dict(cfg.logging)
    if args.log_level:
        log_cfg["log_level"] = args.log_level
    try:
        setup_logging(**log_cfg, context={"app": "paraflake"})
    except (TypeError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    if args.seed is not None:
        push_context(seed=args.seed)

    try:
        options = cfg.snowflake.with_overrides(
            num_arms=args.arms,
            arm_length=args.length,
            arm_thickness=args.thickness,
            num_spikes=args.spikes,
            spacer=args.spacer,
            spike_angle_deg=args.angle,
        )
        flake = Snowflake(options, rng=make_random_source(args.seed))
        text = render(flake, args.format, GCodeExporter(cfg.machine))
    except (ConfigError, GCodeError) as exc:
        logger.error("%s", exc)
        return 2

    if args.output:
        fs.atomic_write_text(args.output, text)
        logger.info("Wrote %s output to %s", args.format, args.output)
    else:
        sys.stdout.write(text)

    if args.preview:
        from paraflake.export.preview import save_preview

        save_preview(flake.path, args.preview)

    return 0


if __name__ == "__main__":
    sys.exit(main())
