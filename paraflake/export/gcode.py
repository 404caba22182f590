"""G-code export -- outline polylines to motion commands.

Two levels of output:

``format_motion_lines(polyline)``
    The bare vertex list: one ``G1 X<x> Y<y>`` line per point, two
    decimals, fixed-point.  No header, no feeds, no Z moves.

``GCodeExporter(machine).generate(polyline)``
    A complete plotter program around the same vertex lines: units and
    positioning header, pen-up rapid to the first vertex, pen down, the
    outline, a closing move back to the start, pen up, return home.

All placement (origin offset) is applied **here**; the generated program
uses absolute machine coordinates only -- no ``G92`` commands.

Feed rate convention:
    Python stores feed rates in **mm/s**.  This module converts to the
    G-code ``F`` parameter (mm/min) at the generation boundary::

        F_value = feed_mm_s * 60.0
"""

from __future__ import annotations

import logging
from io import StringIO

from paraflake.configs.loader import MachineConfig
from paraflake.geometry.point import Point
from paraflake.geometry.polyline import Polyline

logger = logging.getLogger(__name__)


class GCodeError(Exception):
    """Raised when G-code generation fails due to invalid input."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _f(feed_mm_s: float) -> str:
    """Convert mm/s feed rate to G-code ``F`` parameter (mm/min)."""
    return f"F{feed_mm_s * 60.0:.1f}"


def format_motion_lines(polyline: Polyline) -> str:
    """One ``G1 X.. Y..`` line per vertex, in path order."""
    return polyline.format()


# ---------------------------------------------------------------------------
# Exporter
# ---------------------------------------------------------------------------


class GCodeExporter:
    """Convert a closed outline to a plotter program.

    Parameters
    ----------
    config : MachineConfig
        Validated machine configuration.
    """

    def __init__(self, config: MachineConfig) -> None:
        self._cfg = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, polyline: Polyline, comment: str | None = None) -> str:
        """Generate a complete G-code program drawing *polyline*.

        Parameters
        ----------
        polyline : Polyline
            Outline in shape coordinates (centred on the origin).
        comment : str | None
            Extra header comment line (e.g. the snowflake parameters).

        Returns
        -------
        str
            Program including header and footer.

        Raises
        ------
        GCodeError
            If *polyline* is empty or any vertex falls outside the
            work area once placed.
        """
        if len(polyline) == 0:
            raise GCodeError("Cannot generate G-code for an empty polyline")

        placed = self._place(polyline)

        buf = StringIO()
        self._write_header(buf, comment)
        self._write_outline(placed, buf)
        self._write_footer(buf)

        logger.debug("Generated G-code for %d vertices", len(placed))
        return buf.getvalue()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _place(self, polyline: Polyline) -> Polyline:
        """Copy of *polyline* moved to machine coordinates, validated."""
        placed = polyline.clone()
        for point in placed:
            point.relative_move(self._cfg.origin_x_mm, self._cfg.origin_y_mm)
            self._validate_xy(point)
        return placed

    def _write_outline(self, placed: Polyline, buf: StringIO) -> None:
        feeds = self._cfg.feeds
        z = self._cfg.z_states
        first = placed[0]

        buf.write(f"G0 Z{z.travel_mm:.3f} {_f(feeds.plunge_mm_s)}\n")
        buf.write(f"G0 X{first.x:.2f} Y{first.y:.2f} {_f(feeds.travel_mm_s)}\n")
        buf.write(f"G1 Z{z.work_mm:.3f} {_f(feeds.plunge_mm_s)}\n")
        buf.write(f"G1 {_f(feeds.draw_mm_s)}\n")
        buf.write(placed.format())
        # Close the outline back to its first vertex
        buf.write(first.format() + "\n")
        buf.write(f"G0 Z{z.travel_mm:.3f} {_f(feeds.plunge_mm_s)}\n")

    def _write_header(self, buf: StringIO, comment: str | None) -> None:
        buf.write("; Generated by paraflake\n")
        if comment:
            buf.write(f"; {comment}\n")
        buf.write("; Units: mm, absolute positioning\n")
        buf.write("G21 ; mm mode\n")
        buf.write("G90 ; absolute positioning\n")
        buf.write("\n")

    def _write_footer(self, buf: StringIO) -> None:
        buf.write("\n")
        buf.write("; --- End of job ---\n")
        buf.write(f"G0 X0 Y0 {_f(self._cfg.feeds.travel_mm_s)}\n")
        buf.write("M400 ; wait for motion complete\n")

    def _validate_xy(self, point: Point) -> None:
        """Reject positions outside the machine work area.

        Raises
        ------
        GCodeError
            If either coordinate is out of bounds.
        """
        wa = self._cfg.work_area
        if point.x < 0 or point.x > wa.x:
            raise GCodeError(
                f"X={point.x:.3f} mm outside work area [0, {wa.x:.1f}]"
            )
        if point.y < 0 or point.y > wa.y:
            raise GCodeError(
                f"Y={point.y:.3f} mm outside work area [0, {wa.y:.1f}]"
            )
