#!/usr/bin/env python3
# rpc_console/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console.

Provides:
- Method-name completion (CommandRegistry, CompletionEngine).
- Line decoding (parse_line).
- Dispatch glue and result formatters (handle_line, ResultFormatterRegistry).
- Line sources and editors (LineReader, prompt_toolkit / readline editors).
- The console run loop and lifecycle (Console, PendingTask, RunState).
- Dynamic method loader.
"""


# Completion FIRST (cli depends on it)
from .completion import CommandRegistry, CompletionEngine, CompletionResult

# Parser utilities
from .parser import decode_values, parse_line

# Dispatch glue / formatters
from .handler import ResultFormatterRegistry, default_formatter, dispatch, handle_line

# Line sources (after completion is available)
from .cli import (
    BaseLineEditor,
    PromptToolkitEditor,
    ReadlineEditor,
    LineReader,
    make_line_editor,
    HISTORY_FILE_PATH,
)

# Console
from .console import Console, PendingTask, RunState, DEFAULT_PROMPT

# Loader
from .loader import load_methods, DEFAULT_METHODS_PACKAGE

__all__ = [
    # completion
    "CommandRegistry",
    "CompletionEngine",
    "CompletionResult",
    # parser
    "decode_values",
    "parse_line",
    # handler
    "ResultFormatterRegistry",
    "default_formatter",
    "dispatch",
    "handle_line",
    # cli
    "BaseLineEditor",
    "PromptToolkitEditor",
    "ReadlineEditor",
    "LineReader",
    "make_line_editor",
    "HISTORY_FILE_PATH",
    # console
    "Console",
    "PendingTask",
    "RunState",
    "DEFAULT_PROMPT",
    # loader
    "load_methods",
    "DEFAULT_METHODS_PACKAGE",
]
