"""Parametric snowflake construction.

One arm is built from a zig-zag of spikes along the +X axis, mirrored
across the axis and capped with a pointed tip.  ``num_arms`` copies of
that arm, each rotated a further ``-360 / num_arms`` degrees, are joined
into one closed outline centred on the origin.

Arm layout (upper half, before mirroring)::

    base ─ (x1 ─ peak ─ x3) × num_spikes ─ end ─ tip
                                                  │
    mirrored half traversed tip → base ───────────┘

Only :attr:`Snowflake.path` (as a copy), :meth:`Snowflake.draw` and
:meth:`Snowflake.format` are exposed; the geometry is fixed once the
constructor returns.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from paraflake.builder.options import ConfigError, SnowflakeOptions
from paraflake.builder.random_source import RandomSource, make_random_source
from paraflake.geometry.point import Point
from paraflake.geometry.polyline import Polyline

if TYPE_CHECKING:
    from paraflake.export.surface import DrawingSurface

logger = logging.getLogger(__name__)

# Tip extends this fraction of the arm length past the arm end
_TIP_OVERHANG = 0.1


def gap_size(options: SnowflakeOptions) -> float:
    """Half of the per-spike share of the arm length.

    Raises
    ------
    ConfigError
        If ``num_spikes`` has not been resolved yet.
    """
    if options.num_spikes is None:
        raise ConfigError("num_spikes must be resolved before computing gap size")
    return (options.arm_length / options.num_spikes) / 2


def points_per_arm(num_spikes: int) -> int:
    """Vertex count of one complete arm: two halves of ``3n + 2`` plus the tip."""
    return 2 * (3 * num_spikes + 2) + 1


def build_arm(options: SnowflakeOptions, rng: RandomSource) -> Polyline:
    """Build one complete, closed arm lying along the +X axis.

    Parameters
    ----------
    options : SnowflakeOptions
        Resolved options (``num_spikes`` set).
    rng : RandomSource
        Source of the per-spike lengths.

    Returns
    -------
    Polyline
        ``points_per_arm(options.num_spikes)`` vertices: upper half from
        the base outwards, the tip, then the mirrored half back to the
        base.
    """
    gap = gap_size(options)
    half_t = options.arm_thickness / 2
    spacer = options.spacer
    angle = math.radians(options.spike_angle_deg)
    low, high = options.spike_length_range

    half = Polyline()
    half.append(Point(options.arm_thickness, half_t))

    for n in range(options.num_spikes):
        spike_length = rng.randint(low, high)
        x1 = spacer + gap * (n * 2)
        half.append(Point(x1, half_t))
        half.append(Point(spacer + x1 + spike_length * math.cos(angle), spike_length * math.sin(angle)))
        half.append(Point(spacer + x1 + gap, half_t))

    half.append(Point(options.arm_length, half_t))

    # Mirror image, walked from the tip back to the base
    other_half = half.clone()
    other_half.reflect()
    other_half.reverse()

    half.append(Point(options.arm_length * (1 + _TIP_OVERHANG), 0.0))
    half.extend(other_half)
    return half


class Snowflake:
    """A finished snowflake outline.

    Parameters
    ----------
    options : Mapping | SnowflakeOptions | None
        Construction options.  Missing keys take their defaults; an unset
        ``num_spikes`` is drawn from *rng* in ``[2, 5]``.
    rng : RandomSource | None
        Source for ``num_spikes`` and spike lengths.  ``None`` uses a
        fresh, OS-seeded ``random.Random``.
    **overrides
        Extra options merged over *options*.

    Raises
    ------
    ConfigError
        If any option is invalid (e.g. ``num_spikes=0``, non-finite
        lengths, ``num_arms < 1``).

    Examples
    --------
    >>> flake = Snowflake({"numArms": 6, "numSpikes": 3}, rng=random.Random(1))
    >>> len(flake) == 6 * flake.points_per_arm
    True
    """

    def __init__(
        self,
        options: Mapping[str, Any] | SnowflakeOptions | None = None,
        rng: RandomSource | None = None,
        **overrides: Any,
    ) -> None:
        if isinstance(options, SnowflakeOptions):
            opts = options.with_overrides(**overrides)
        else:
            opts = SnowflakeOptions.from_mapping(options, **overrides)

        if opts.ignored_keys:
            logger.debug("Ignoring unrecognised snowflake options: %s", opts.ignored_keys)

        self._rng = rng if rng is not None else make_random_source()
        self._options = opts.resolve(self._rng)
        self._gap_size = gap_size(self._options)
        self._points_per_arm = points_per_arm(self._options.num_spikes)
        self._path = self._assemble()

        logger.info(
            "Built snowflake: arms=%d spikes=%d length=%g -> %d points",
            self._options.num_arms,
            self._options.num_spikes,
            self._options.arm_length,
            len(self._path),
        )

    def _assemble(self) -> Polyline:
        arm = build_arm(self._options, self._rng)
        step = math.radians(-(360 / self._options.num_arms))

        path = Polyline()
        # Arm k ends up rotated by k * step; the first arm keeps its orientation
        for _ in range(self._options.num_arms):
            path.extend(arm)
            arm.rotate(step)
        return path

    # ------------------------------------------------------------------
    # Read-only API
    # ------------------------------------------------------------------

    @property
    def options(self) -> SnowflakeOptions:
        return self._options

    @property
    def gap_size(self) -> float:
        return self._gap_size

    @property
    def points_per_arm(self) -> int:
        return self._points_per_arm

    @property
    def path(self) -> Polyline:
        """Copy of the assembled outline."""
        return self._path.clone()

    def __len__(self) -> int:
        return len(self._path)

    def draw(self, surface: DrawingSurface) -> None:
        """Draw the outline as one closed path on *surface*."""
        self._path.draw(surface)

    def format(self) -> str:
        """One ``G1 X.. Y..`` line per outline vertex."""
        return self._path.format()
