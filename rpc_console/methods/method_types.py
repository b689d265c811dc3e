#!/usr/bin/env python3
# rpc_console/methods/method_types.py
from __future__ import annotations

"""
Method data structures and protocols.

This module defines:
- MethodCallback: the callable protocol for any method implementation.
- Method: a registered method with metadata and a callable.
- Dispatcher: what the console needs from whatever executes methods.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

# The console talks to its dispatcher as a single fixed session.
SESSION_ID = 0


class MethodCallback(Protocol):
    """Protocol for any method function."""

    def __call__(self, *args: Any) -> Any:  # pragma: no cover - signature only
        ...


class Dispatcher(Protocol):
    """
    Executes named methods for the console.

    invoke() raises DispatchError (or any exception, which the console wraps)
    when the method fails.
    """

    def invoke(self, session_id: int, method: str, args: Sequence[Any]) -> Any:  # pragma: no cover
        ...

    def method_names(self, session_id: int) -> Sequence[str]:  # pragma: no cover
        ...


@dataclass(slots=True)
class Method:
    """
    A registered method with metadata and a callable to execute.

    Important fields:
        name: Primary unique method name (as typed on the console line).
        description: Short, user-facing description.
        example: One-line example console line (optional).
        callback: Function implementing the method.
        module: Python module path where the method is defined.
        category: Logical group for help output.
        aliases: Extra names resolving to the same method.
        param_names: Parameter names discovered from the callback signature.
    """

    name: str
    description: str
    example: str
    callback: MethodCallback
    module: str = field(default="", repr=False)
    category: str = "general"
    aliases: list[str] = field(default_factory=list)  # type: ignore
    param_names: list[str] = field(default_factory=list)  # type: ignore

    def invoke(self, *args: Any) -> Any:
        """Execute the underlying callback with positional arguments."""
        return self.callback(*args)
