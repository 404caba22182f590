"""Configuration loading and validation (``snowflake.yaml``)."""

from paraflake.configs.loader import (
    DEFAULT_CONFIG_PATH,
    FeedsConfig,
    GeneratorConfig,
    MachineConfig,
    WorkAreaConfig,
    ZStatesConfig,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "FeedsConfig",
    "GeneratorConfig",
    "MachineConfig",
    "WorkAreaConfig",
    "ZStatesConfig",
    "load_config",
]
