#!/usr/bin/env python3
# rpc_console/config/__init__.py
from __future__ import annotations

"""
Package for console configuration.

Provides:
- Configuration loader with file and environment overrides (`load_config`).
- The immutable `AppConfig` result and the `DEFAULTS` it starts from.
"""


from .config import AppConfig, DEFAULTS, ENV_PREFIX, load_config

__all__ = [
    "AppConfig",
    "DEFAULTS",
    "ENV_PREFIX",
    "load_config",
]
