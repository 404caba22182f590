"""Matplotlib preview of a drawn outline.

``MatplotlibSurface`` turns drawing calls into ``matplotlib.path.Path``
patches on an existing axes; ``save_preview`` renders a PNG with the
non-interactive Agg canvas.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Union

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from paraflake.utils.fs import ensure_dir

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from paraflake.geometry.polyline import Polyline

logger = logging.getLogger(__name__)


class MatplotlibSurface:
    """Drawing surface that adds one ``PathPatch`` per closed path.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Target axes.
    **patch_kwargs
        Forwarded to ``PathPatch`` (e.g. ``edgecolor``, ``linewidth``).
    """

    def __init__(self, ax: "Axes", **patch_kwargs) -> None:
        self.ax = ax
        self.patch_kwargs = {"facecolor": "none", "edgecolor": "black", "linewidth": 0.8}
        self.patch_kwargs.update(patch_kwargs)
        self._vertices: list[tuple[float, float]] = []
        self._codes: list[int] = []

    def begin_path(self) -> None:
        self._vertices = []
        self._codes = []

    def move_to(self, x: float, y: float) -> None:
        self._vertices.append((x, y))
        self._codes.append(MplPath.MOVETO)

    def line_to(self, x: float, y: float) -> None:
        self._vertices.append((x, y))
        self._codes.append(MplPath.LINETO)

    def close_path(self) -> None:
        if not self._vertices:
            return
        # CLOSEPOLY ignores its vertex; repeat the start for clarity
        self._vertices.append(self._vertices[0])
        self._codes.append(MplPath.CLOSEPOLY)
        self.ax.add_patch(PathPatch(MplPath(self._vertices, self._codes), **self.patch_kwargs))
        self._vertices = []
        self._codes = []


def save_preview(
    polyline: "Polyline",
    path: Union[str, Path],
    *,
    size_in: float = 6.0,
    dpi: int = 150,
    margin: float = 5.0,
) -> Path:
    """Render *polyline* to a square PNG at *path*.

    Raises
    ------
    ValueError
        If *polyline* is empty.
    """
    min_x, min_y, max_x, max_y = polyline.bounds()

    fig = Figure(figsize=(size_in, size_in))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(1, 1, 1)
    polyline.draw(MatplotlibSurface(ax))
    ax.set_xlim(min_x - margin, max_x + margin)
    ax.set_ylim(min_y - margin, max_y + margin)
    ax.set_aspect("equal")
    ax.set_axis_off()

    path = Path(path)
    ensure_dir(path.parent)
    fig.savefig(path, dpi=dpi)
    logger.info("Preview written to %s", path)
    return path
