"""Shared utilities for paraflake.

Modules:
    fs: YAML loading and atomic file writes
    logging_config: Root logger setup with contextual fields

No module in utils/ may import from upper layers (geometry, builder, export).

Convenience imports:
    from paraflake.utils import fs
    from paraflake.utils.logging_config import setup_logging, push_context
"""

from . import fs
from . import logging_config

from .logging_config import push_context, setup_logging

__all__ = [
    "fs",
    "logging_config",
    "push_context",
    "setup_logging",
]
