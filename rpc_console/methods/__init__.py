#!/usr/bin/env python3
# rpc_console/methods/__init__.py
from __future__ import annotations

"""
Package for method management and dispatch.

Provides:
- Data structures and protocols (`Method`, `MethodCallback`, `Dispatcher`).
- In-memory registry and decorators (`REGISTRY`, `method`, `register_method`).
- The in-process dispatcher (`LocalDispatcher`).
"""


# Re-export from submodules
from .method_types import Method, MethodCallback, Dispatcher, SESSION_ID
from .methods import (
    REGISTRY,
    MethodRegistry,
    LocalDispatcher,
    build_usage,
    method,
    register_method,
)

__all__ = [
    "Method",
    "MethodCallback",
    "Dispatcher",
    "SESSION_ID",
    "REGISTRY",
    "MethodRegistry",
    "LocalDispatcher",
    "build_usage",
    "method",
    "register_method",
]
