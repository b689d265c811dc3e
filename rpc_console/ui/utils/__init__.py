#!/usr/bin/env python3
# rpc_console/ui/utils/__init__.py
from __future__ import annotations
from .ansi import ANSI, strip_ansi, supports_ansi, colorize
from .console import PRINT_MUTEX, print_line, write_text

__all__ = [
    "ANSI",
    "strip_ansi",
    "supports_ansi",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "write_text",
]
