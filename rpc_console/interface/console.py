#!/usr/bin/env python3
# rpc_console/interface/console.py
from __future__ import annotations

"""
The console: lifecycle state machine plus the read-dispatch-format run loop.

    console = Console(LocalDispatcher())
    console.set_formatter("help", lambda result, args: result)
    console.start()
    console.wait()

The loop runs on one background thread (a PendingTask). Cancellation is
cooperative: stop() sets a flag checked at the top of every cycle and right
after each read, and asks an interactive editor to abort its prompt. A plain
blocking read (piped stdin) cannot be interrupted, so stop() returns once that
read does; the line it produced is dropped without echo.
"""

import enum
import logging
import sys
import threading
from typing import Any, Callable, Optional, Sequence

from rpc_console.errors import END_OF_INPUT, ConsoleError, LifecycleError
from rpc_console.interface.cli import BaseLineEditor, LineReader, make_line_editor
from rpc_console.interface.completion import CommandRegistry, CompletionEngine
from rpc_console.interface.handler import ResultFormatterRegistry, handle_line
from rpc_console.methods import SESSION_ID, Dispatcher
from rpc_console.ui import print_line

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = ">>> "


class RunState(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    CANCEL_REQUESTED = "cancel_requested"
    STOPPED = "stopped"


class PendingTask:
    """A cancellable unit of background work running on its own thread."""

    def __init__(self, target: Callable[["PendingTask"], None], name: str = "rpc-console") -> None:
        self._target = target
        self._cancel = threading.Event()
        self._done = threading.Event()
        self._exception: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def launch(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        try:
            self._target(self)
        except Exception as exc:
            self._exception = exc
        finally:
            self._done.set()

    def request_cancel(self) -> None:
        self._cancel.set()

    def is_cancel_requested(self) -> bool:
        return self._cancel.is_set()

    def await_completion(self, timeout: Optional[float] = None) -> bool:
        """Block until the task exits; False if `timeout` elapsed first."""
        return self._done.wait(timeout)

    def done(self) -> bool:
        return self._done.is_set()

    def exception(self) -> Optional[BaseException]:
        """The error that ended the task, if any."""
        return self._exception

    def in_task_thread(self) -> bool:
        return threading.current_thread() is self._thread


class Console:
    """Interactive RPC console over a Dispatcher."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        prompt: str = DEFAULT_PROMPT,
        stdin=None,
        stdout=None,
        enable_completion: bool = True,
        editor_factory: Callable[[], Optional[BaseLineEditor]] = make_line_editor,
        poll_interval: float = 0.1,
    ) -> None:
        self.dispatcher = dispatcher
        self.commands = CommandRegistry()
        self.completion = CompletionEngine(self.commands)
        self.formatters = ResultFormatterRegistry()
        self._prompt = prompt
        self._stdout = stdout
        self._reader = LineReader(
            self.completion if enable_completion else None,
            stdin=stdin,
            stdout=stdout,
            editor_factory=editor_factory,
            poll_interval=poll_interval,
        )
        self._state = RunState.NOT_STARTED
        self._state_lock = threading.Lock()
        self._task: Optional[PendingTask] = None

    # ---------------- Configuration ----------------

    @property
    def prompt(self) -> str:
        return self._prompt

    def set_prompt(self, prompt: str) -> None:
        """Takes effect on the next read."""
        self._prompt = prompt

    def set_formatter(self, method: str, formatter: Callable[[Any, Sequence[Any]], str]) -> None:
        """Render results of `method` with `formatter(result, [method, *args])`."""
        self.formatters.set_formatter(method, formatter)

    format_result = set_formatter

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def task(self) -> Optional[PendingTask]:
        return self._task

    @property
    def out(self):
        return self._stdout if self._stdout is not None else sys.stdout

    # ---------------- Lifecycle ----------------

    def start(self) -> None:
        """Snapshot the method list and launch the run loop."""
        with self._state_lock:
            if self._state in (RunState.RUNNING, RunState.CANCEL_REQUESTED):
                raise LifecycleError("console is already running")
            if self._state is RunState.STOPPED:
                raise LifecycleError(
                    "console has stopped; call reset() before starting it again")

            self.commands.replace(self.dispatcher.method_names(SESSION_ID))
            self._task = PendingTask(self._run)
            self._state = RunState.RUNNING
            logger.debug("console started with %d method(s)", len(self.commands))
            self._task.launch()

    def stop(self) -> None:
        """Request cancellation and block until the run loop has exited."""
        task = self._task
        if task is None:
            return
        with self._state_lock:
            if self._state is RunState.RUNNING:
                self._state = RunState.CANCEL_REQUESTED
        task.request_cancel()
        self._reader.interrupt()
        if task.in_task_thread():
            # called from a formatter or method; the loop exits after this line
            return
        task.await_completion()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run loop exits on its own; False on timeout."""
        task = self._task
        if task is None:
            raise LifecycleError("console was never started")
        if task.in_task_thread():
            raise LifecycleError("wait() called from inside the run loop")
        return task.await_completion(timeout)

    def reset(self) -> None:
        """Return a stopped console to NOT_STARTED so it can be started again."""
        with self._state_lock:
            if self._state in (RunState.RUNNING, RunState.CANCEL_REQUESTED):
                raise LifecycleError("cannot reset a running console; stop() it first")
            self._task = None
            self._state = RunState.NOT_STARTED

    def close(self) -> None:
        """
        Stop the loop if needed and release the line editor.

        The run loop thread keeps the console reachable, so nothing stops it
        implicitly; call close() or use the console as a context manager.
        """
        self.stop()
        self._reader.close()

    def __enter__(self) -> "Console":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------------- Run loop ----------------

    def _run(self, task: PendingTask) -> None:
        try:
            while not task.is_cancel_requested():
                line = self._reader.read_line(self._prompt, task.is_cancel_requested)
                if line is END_OF_INPUT:
                    logger.debug("end of input")
                    break
                if task.is_cancel_requested():
                    break

                print_line(line, file=self.out, flush=True)
                try:
                    output = handle_line(line, self.dispatcher, self.formatters)
                except ConsoleError as exc:
                    print_line(exc.to_detail_string(), file=self.out, flush=True)
                    continue
                if output is not None:
                    print_line(output, file=self.out, flush=True)
        except Exception:
            logger.exception("console run loop terminated by an unexpected error")
            raise
        finally:
            with self._state_lock:
                self._state = RunState.STOPPED
            logger.debug("console stopped")
