#!/usr/bin/env python3
# rpc_console/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the RPC console.

Each step prints a Linux-style [  OK  ] / [FAILED] line when the banner is
enabled; a failed step re-raises so the entry point can exit non-zero.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
import logging
import platform
import sys

from rpc_console.config import AppConfig, load_config
from rpc_console.interface import Console, load_methods, make_line_editor
from rpc_console.methods import REGISTRY, LocalDispatcher
from rpc_console.ui import colorize, format_table, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    dispatcher: LocalDispatcher
    console: Console
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, verbose: bool = True) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red", stream=sys.stderr),
            file=sys.stderr,
        )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green", stream=sys.stdout))
    return out


def _format_methods(result: Any, args: Any) -> str:
    """Render the `methods` listing as a table with descriptions."""
    rows = []
    for name in result:
        method_obj = REGISTRY.get(name)
        description = method_obj.description if method_obj else ""
        alias_of = method_obj.name if method_obj and method_obj.name != name else ""
        rows.append([name, alias_of or "-", description])
    return format_table(rows, headers=["Method", "Alias of", "Description"])


def register_default_formatters(console: Console) -> None:
    console.set_formatter("help", lambda result, args: str(result))
    console.set_formatter("methods", _format_methods)


def boot_sequence(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    interactive: bool = True,
) -> BootState:
    """Load configuration, logging and methods, then build (not start) the console."""
    config = _step("Load configuration", lambda: load_config(overrides), verbose=False)
    verbose = config.show_banner and interactive

    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        verbose=verbose,
    )
    _step("Validate configuration", lambda: config, verbose=verbose)

    level = getattr(logging, config.log_level or "WARNING")
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "rpc_console",
            level=level,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        verbose=verbose,
    )

    loaded_count = _step(
        f"Load methods from '{config.methods_package}'",
        lambda: load_methods(config.methods_package),
        verbose=verbose,
    )
    dispatcher = _step("Create dispatcher", lambda: LocalDispatcher(REGISTRY), verbose=verbose)

    console = _step(
        "Create console",
        lambda: Console(
            dispatcher,
            prompt=config.prompt,
            enable_completion=config.enable_completion,
            editor_factory=lambda: make_line_editor(config.history_file_path),
            poll_interval=config.read_poll_interval,
        ),
        verbose=verbose,
    )
    _step("Register result formatters", lambda: register_default_formatters(console), verbose=verbose)
    logger.debug("boot complete: %d plugin module(s), %d method name(s)",
                 loaded_count, len(REGISTRY.names()))

    return BootState(
        config=config,
        logger=logger,
        dispatcher=dispatcher,
        console=console,
        loaded_count=loaded_count,
    )
