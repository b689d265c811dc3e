#!/usr/bin/env python3
# rpc_console/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    strip_ansi,
    supports_ansi,
    colorize,
    PRINT_MUTEX,
    print_line,
    write_text,
)
from .static import (
    format_table,
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "strip_ansi",
    "supports_ansi",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "write_text",
    "format_table",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
