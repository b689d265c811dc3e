#!/usr/bin/env python3
# rpc_console/__main__.py
from __future__ import annotations
"""
Entry point: python -m rpc_console  (or the `rpc-console` script).

Reads console lines from a terminal (with completion and history) or from
piped stdin, e.g.:

    printf 'echo "hi"\\nadd 1 2\\n' | rpc-console
"""

import argparse
import sys

from rpc_console.boot import boot_sequence


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="rpc-console",
        description="Interactive console for JSON-argument RPC methods")
    ap.add_argument("--prompt", default=None, help="Prompt string")
    ap.add_argument("--no-completion", action="store_true",
                    help="Disable tab completion of method names")
    ap.add_argument("--log-level", default=None,
                    help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    ap.add_argument("--log-file", default=None, help="Rotating log file path")
    ap.add_argument("--methods-package", default=None,
                    help="Package to load methods from (default: rpc_console.plugins)")
    return ap


def _tolerate_undecodable_input() -> None:
    """A bad byte in piped input becomes U+FFFD in its own line instead of ending the session."""
    reconfigure = getattr(sys.stdin, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="replace")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _tolerate_undecodable_input()
    overrides = {
        "PROMPT": args.prompt,
        "ENABLE_COMPLETION": False if args.no_completion else None,
        "LOG_LEVEL": args.log_level,
        "LOG_FILE_PATH": args.log_file,
        "METHODS_PACKAGE": args.methods_package,
    }

    try:
        state = boot_sequence(overrides, interactive=sys.stdin.isatty())
    except Exception:
        return 1

    console = state.console
    try:
        console.start()
        console.wait()
    except KeyboardInterrupt:
        state.logger.debug("interrupted; stopping console")
    finally:
        console.close()

    task = console.task
    return 1 if task is not None and task.exception() is not None else 0


if __name__ == "__main__":
    sys.exit(main())
