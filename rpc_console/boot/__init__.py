#!/usr/bin/env python3
# rpc_console/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Startup pipeline with Linux-style [  OK  ] / [FAILED] lines.
- BootState: Dataclass holding config, logger, dispatcher and the console.
"""


from .boot import BootState, boot_sequence, register_default_formatters

__all__ = ["boot_sequence", "BootState", "register_default_formatters"]
