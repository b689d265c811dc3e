#!/usr/bin/env python3
# rpc_console/ui/utils/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for all console output (results, prompts, logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    out = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        out.write(f"{text}\n")
        if flush:
            out.flush()


def write_text(text: str, *, file=None) -> None:
    """Write `text` without a newline and flush (prompts)."""
    out = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        out.write(text)
        out.flush()
