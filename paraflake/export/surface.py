"""Drawing surfaces.

A surface is anything with the four canvas-style path calls below.
:meth:`Polyline.draw` only ever talks to this protocol, so the same
outline can go to an SVG document, a matplotlib axes, or a test
recorder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class DrawingSurface(Protocol):
    """Minimal 2D path-drawing interface."""

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...


# ---------------------------------------------------------------------------
# SVG
# ---------------------------------------------------------------------------


def _fmt(x: float, precision: int) -> str:
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    # Normalise -0.0 and tiny negatives so "-0" never appears
    if s in ("", "-0"):
        s = "0"
    return s


@dataclass(frozen=True)
class SvgStyle:
    stroke: str = "#000"
    stroke_width: float = 0.5
    fill: str = "none"
    stroke_linejoin: str = "round"


class SvgPathSurface:
    """Collects drawing calls into SVG path data.

    Each ``begin_path`` starts a new ``<path>`` element; ``move_to`` /
    ``line_to`` / ``close_path`` map onto ``M`` / ``L`` / ``Z``.

    Parameters
    ----------
    precision : int
        Decimal places kept in coordinates.
    """

    def __init__(self, precision: int = 3) -> None:
        self.precision = precision
        self._paths: list[list[str]] = []
        self._min_x = self._min_y = math.inf
        self._max_x = self._max_y = -math.inf

    # -- DrawingSurface -----------------------------------------------------

    def begin_path(self) -> None:
        self._paths.append([])

    def move_to(self, x: float, y: float) -> None:
        self._command("M", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._command("L", x, y)

    def close_path(self) -> None:
        self._current().append("Z")

    # -- Output -------------------------------------------------------------

    @property
    def path_data(self) -> list[str]:
        """``d`` attribute of every path drawn so far."""
        return [" ".join(cmds) for cmds in self._paths if cmds]

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        if self._min_x > self._max_x:
            raise ValueError("Nothing has been drawn on this surface")
        return self._min_x, self._min_y, self._max_x, self._max_y

    def to_svg(
        self,
        *,
        margin: float = 5.0,
        style: SvgStyle = SvgStyle(),
        flip_y: bool = True,
        title: str | None = None,
    ) -> str:
        """Render everything drawn so far as a standalone SVG document.

        Parameters
        ----------
        margin : float
            Padding around the drawing, in drawing units.
        style : SvgStyle
            Stroke/fill attributes shared by every path.
        flip_y : bool
            Mirror vertically so +Y points up, matching machine
            coordinates (SVG's own +Y points down).
        title : str | None
            Optional ``<title>`` element.

        Raises
        ------
        ValueError
            If nothing has been drawn, or the padded bounds are degenerate.
        """
        minx, miny, maxx, maxy = self.bounds
        minx -= margin
        miny -= margin
        maxx += margin
        maxy += margin
        w = maxx - minx
        h = maxy - miny
        if w <= 0 or h <= 0:
            raise ValueError(
                "Degenerate bounds after margin (width or height is zero). "
                "Use margin > 0 to render collinear geometry."
            )

        p = self.precision
        view_box = f"{_fmt(minx, p)} {_fmt(miny, p)} {_fmt(w, p)} {_fmt(h, p)}"

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="{view_box}">',
        ]
        if title:
            safe_title = title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
            lines.append(f"  <title>{safe_title}</title>")

        style_attr = (
            f'stroke="{style.stroke}" stroke-width="{_fmt(style.stroke_width, p)}" '
            f'fill="{style.fill}" stroke-linejoin="{style.stroke_linejoin}"'
        )

        indent = "  "
        if flip_y:
            # Flip about the horizontal centre line of the viewBox
            lines.append(f'  <g transform="translate(0,{_fmt(miny + maxy, p)}) scale(1,-1)">')
            indent = "    "

        for d in self.path_data:
            lines.append(f'{indent}<path d="{d}" {style_attr} />')

        if flip_y:
            lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    # -- Internal -----------------------------------------------------------

    def _current(self) -> list[str]:
        if not self._paths:
            raise ValueError("begin_path() must be called before drawing")
        return self._paths[-1]

    def _command(self, op: str, x: float, y: float) -> None:
        p = self.precision
        self._current().append(f"{op}{_fmt(x, p)},{_fmt(y, p)}")
        self._min_x = min(self._min_x, x)
        self._min_y = min(self._min_y, y)
        self._max_x = max(self._max_x, x)
        self._max_y = max(self._max_y, y)
