#!/usr/bin/env python3
# rpc_console/interface/handler.py
from __future__ import annotations

"""
Dispatch glue and result formatting.

handle_line() takes one raw console line through parse -> dispatch -> format
and returns the text to print (None when the line is a no-op). Per-line
failures surface as ConsoleError subclasses for the run loop to render.
"""

import json
import threading
from typing import Any, Callable, Optional, Sequence

from rpc_console.errors import ConsoleError, DispatchError, FormatError
from rpc_console.interface.parser import parse_line
from rpc_console.methods import SESSION_ID, Dispatcher

# (result, [method, *args]) -> display string
Formatter = Callable[[Any, Sequence[Any]], str]


def default_formatter(result: Any, args: Sequence[Any]) -> str:
    """Generic pretty printer used when a method has no formatter."""
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)


class ResultFormatterRegistry:
    """Method name -> formatter, with a single default for unknown names."""

    def __init__(self, default: Formatter = default_formatter) -> None:
        self._formatters: dict[str, Formatter] = {}
        self._lock = threading.Lock()
        self.default = default

    def set_formatter(self, method: str, formatter: Formatter) -> None:
        """Register `formatter` for `method`; the last registration wins."""
        with self._lock:
            self._formatters[method] = formatter

    def get(self, method: str) -> Optional[Formatter]:
        with self._lock:
            return self._formatters.get(method)

    def __contains__(self, method: object) -> bool:
        with self._lock:
            return method in self._formatters

    def format(self, method: str, result: Any, args: Sequence[Any]) -> str:
        """Render `result`; any formatter failure, default included, is a FormatError."""
        formatter = self.get(method)
        label = f"formatter for '{method}'" if formatter is not None else "default formatter"
        try:
            return str((formatter or self.default)(result, args))
        except Exception as exc:
            raise FormatError(f"{label} failed: {type(exc).__name__}: {exc}") from exc


def dispatch(dispatcher: Dispatcher, method: str, args: Sequence[Any]) -> Any:
    """Invoke `method`, normalizing foreign exceptions into DispatchError."""
    try:
        return dispatcher.invoke(SESSION_ID, method, list(args))
    except ConsoleError:
        raise
    except Exception as exc:
        raise DispatchError(f"{type(exc).__name__}: {exc}") from exc


def handle_line(
    input_line: str,
    dispatcher: Dispatcher,
    formatters: ResultFormatterRegistry,
) -> str | None:
    """
    Parse and execute one console line.

    Returns:
        - None if nothing should be printed (blank line / empty array).
        - The rendered result otherwise.
    """
    values = parse_line(input_line)
    if not values:
        return None

    method, *args = values
    result = dispatch(dispatcher, method, args)
    return formatters.format(method, result, values)
