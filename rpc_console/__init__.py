#!/usr/bin/env python3
# rpc_console/__init__.py
from __future__ import annotations
"""
Interactive RPC console.

Reads lines like `transfer "alice" "bob" 10`, dispatches them as method calls
and prints the formatted result.

Keep this module light: only the version and the most used names.
"""

__version__ = "0.1.0"

from rpc_console.errors import (  # noqa: E402
    ConsoleError,
    DispatchError,
    FormatError,
    LifecycleError,
    ParseError,
)
from rpc_console.interface import Console, RunState  # noqa: E402
from rpc_console.methods import LocalDispatcher, MethodRegistry, method  # noqa: E402

__all__ = [
    "__version__",
    "Console",
    "RunState",
    "LocalDispatcher",
    "MethodRegistry",
    "method",
    "ConsoleError",
    "DispatchError",
    "FormatError",
    "LifecycleError",
    "ParseError",
]
