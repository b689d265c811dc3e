#!/usr/bin/env python3
# rpc_console/errors.py
from __future__ import annotations

"""
Error taxonomy for the console.

Per-line errors (ParseError, DispatchError, FormatError) are rendered and the
run loop continues. LifecycleError is raised to the caller of start/stop/wait.
End of input is not an error: the line reader returns END_OF_INPUT.
"""


class ConsoleError(Exception):
    """Structured error: a machine-distinguishable kind plus a detail message."""

    kind = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def to_detail_string(self) -> str:
        return f"[{self.kind}] {self.detail}"


class ParseError(ConsoleError):
    kind = "parse_error"


class DispatchError(ConsoleError):
    kind = "dispatch_error"


class FormatError(ConsoleError):
    kind = "format_error"


class LifecycleError(ConsoleError):
    kind = "lifecycle_error"


class EndOfInput:
    """Sentinel returned by line readers once input is exhausted."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "END_OF_INPUT"


END_OF_INPUT = EndOfInput()
