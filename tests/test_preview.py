"""Tests for the matplotlib preview surface."""

from __future__ import annotations

import pytest
from matplotlib.figure import Figure
from matplotlib.path import Path as MplPath

from paraflake.builder.snowflake import Snowflake
from paraflake.export.preview import MatplotlibSurface, save_preview
from paraflake.geometry.polyline import Polyline


@pytest.fixture()
def ax():
    return Figure().add_subplot(1, 1, 1)


class TestMatplotlibSurface:
    def test_adds_closed_patch(self, ax) -> None:
        Polyline.from_points([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]).draw(MatplotlibSurface(ax))

        assert len(ax.patches) == 1
        path = ax.patches[0].get_path()
        assert list(path.codes) == [
            MplPath.MOVETO,
            MplPath.LINETO,
            MplPath.LINETO,
            MplPath.CLOSEPOLY,
        ]

    def test_empty_polyline_adds_nothing(self, ax) -> None:
        Polyline().draw(MatplotlibSurface(ax))
        assert len(ax.patches) == 0

    def test_patch_kwargs(self, ax) -> None:
        surface = MatplotlibSurface(ax, linewidth=2.0)
        Polyline.from_points([(0.0, 0.0), (1.0, 1.0)]).draw(surface)
        assert ax.patches[0].get_linewidth() == 2.0


class TestSavePreview:
    def test_writes_png(self, tmp_path, scripted_random) -> None:
        flake = Snowflake(numArms=6, numSpikes=2, rng=scripted_random())
        out = save_preview(flake.path, tmp_path / "sub" / "flake.png", size_in=2.0, dpi=50)
        assert out.exists()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_rejected(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            save_preview(Polyline(), tmp_path / "empty.png")
