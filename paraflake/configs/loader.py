"""Configuration loader for paraflake.

Loads ``snowflake.yaml`` into typed, frozen objects:

    snowflake:  construction options  -> SnowflakeOptions (pydantic)
    machine:    placement and motion  -> MachineConfig (dataclasses)
    logging:    setup_logging kwargs  -> plain dict

Feed rates are stored in **mm/s** throughout Python.  Conversion to the
G-code ``F`` parameter (mm/min) happens only in the G-code exporter.

Usage::

    from paraflake.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/snowflake.yaml") # explicit path
"""

from __future__ import annotations

import inspect
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from paraflake.builder.options import ConfigError, SnowflakeOptions
from paraflake.utils.fs import load_yaml
from paraflake.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "snowflake.yaml"

# Keys accepted in the ``logging`` section; ``context`` is set by the caller
LOGGING_KEYS = frozenset(inspect.signature(setup_logging).parameters) - {"context"}


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkAreaConfig:
    """Machine work-area dimensions in mm (origin at 0, 0)."""

    x: float
    y: float


@dataclass(frozen=True)
class ZStatesConfig:
    """Z heights in mm for pen-up travel and pen-down drawing."""

    travel_mm: float
    work_mm: float


@dataclass(frozen=True)
class FeedsConfig:
    """Feed rates in mm/s."""

    draw_mm_s: float
    travel_mm_s: float
    plunge_mm_s: float


@dataclass(frozen=True)
class MachineConfig:
    """Where and how the outline is plotted.

    The snowflake is built around (0, 0); ``origin_*_mm`` is where that
    centre lands in machine coordinates.
    """

    origin_x_mm: float
    origin_y_mm: float
    work_area: WorkAreaConfig
    z_states: ZStatesConfig
    feeds: FeedsConfig


@dataclass(frozen=True)
class GeneratorConfig:
    """Complete configuration loaded from ``snowflake.yaml``."""

    snowflake: SnowflakeOptions
    machine: MachineConfig
    logging: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _pair(value: Any, name: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{name} must be a 2-element list, got {value!r}")
    return float(value[0]), float(value[1])


def _parse_machine(data: dict[str, Any]) -> MachineConfig:
    """Parse the ``machine`` section from raw YAML dict."""
    origin_x, origin_y = _pair(data["origin_mm"], "machine.origin_mm")
    wa_x, wa_y = _pair(data["work_area_mm"], "machine.work_area_mm")

    zd = data["z_states"]
    fd = data["feeds"]
    return MachineConfig(
        origin_x_mm=origin_x,
        origin_y_mm=origin_y,
        work_area=WorkAreaConfig(x=wa_x, y=wa_y),
        z_states=ZStatesConfig(
            travel_mm=float(zd["travel_mm"]),
            work_mm=float(zd["work_mm"]),
        ),
        feeds=FeedsConfig(
            draw_mm_s=float(fd["draw_mm_s"]),
            travel_mm_s=float(fd["travel_mm_s"]),
            plunge_mm_s=float(fd.get("plunge_mm_s", fd["travel_mm_s"])),
        ),
    )


def _parse_logging(data: Any) -> dict[str, Any]:
    """Check the ``logging`` section against :func:`setup_logging`."""
    if not isinstance(data, dict):
        raise ConfigError(f"logging section must be a mapping, got {data!r}")
    unknown = sorted(set(data) - LOGGING_KEYS)
    if unknown:
        raise ConfigError(
            f"Unknown logging key(s) {unknown}; expected some of {sorted(LOGGING_KEYS)}"
        )
    return dict(data)


def _validate_machine(cfg: MachineConfig) -> None:
    """Validate cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid combination.
    """
    values = {
        "origin_x_mm": cfg.origin_x_mm,
        "origin_y_mm": cfg.origin_y_mm,
        "work_area.x": cfg.work_area.x,
        "work_area.y": cfg.work_area.y,
        "z_states.travel_mm": cfg.z_states.travel_mm,
        "z_states.work_mm": cfg.z_states.work_mm,
    }
    for name, value in values.items():
        if not math.isfinite(value):
            raise ConfigError(f"machine.{name} must be finite, got {value}")

    if cfg.work_area.x <= 0 or cfg.work_area.y <= 0:
        raise ConfigError(
            f"Work area must be positive, got {cfg.work_area.x} x {cfg.work_area.y}"
        )

    # -- Origin inside work area -------------------------------------------
    if not (0 <= cfg.origin_x_mm <= cfg.work_area.x and 0 <= cfg.origin_y_mm <= cfg.work_area.y):
        raise ConfigError(
            f"Origin ({cfg.origin_x_mm:.1f}, {cfg.origin_y_mm:.1f}) outside work area "
            f"[0, {cfg.work_area.x:.1f}] x [0, {cfg.work_area.y:.1f}]"
        )

    # -- Feeds --------------------------------------------------------------
    for name in ("draw_mm_s", "travel_mm_s", "plunge_mm_s"):
        value = getattr(cfg.feeds, name)
        if not math.isfinite(value) or value <= 0:
            raise ConfigError(f"feeds.{name} must be a positive number, got {value}")

    if cfg.z_states.work_mm >= cfg.z_states.travel_mm:
        logger.warning(
            "Work height %.2f mm is not below travel height %.2f mm",
            cfg.z_states.work_mm,
            cfg.z_states.travel_mm,
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> GeneratorConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``snowflake.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    GeneratorConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If the YAML is malformed, or any field is missing or fails
        validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")

    try:
        snowflake = SnowflakeOptions.from_mapping(data.get("snowflake") or {})
        machine = _parse_machine(data["machine"])
        log_cfg = _parse_logging(data.get("logging") or {})
    except KeyError as exc:
        raise ConfigError(f"Missing required configuration key: {exc}") from exc
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    _validate_machine(machine)
    logger.info("Configuration loaded successfully")
    return GeneratorConfig(snowflake=snowflake, machine=machine, logging=log_cfg)
