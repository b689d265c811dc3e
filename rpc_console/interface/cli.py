#!/usr/bin/env python3
# rpc_console/interface/cli.py
from __future__ import annotations

"""
Line sources for the console.

Editor selection order (interactive terminals only):
    1) prompt_toolkit (completion + history)
    2) readline (completion + history)
    3) none: plain buffered reads, like piped input

LineReader decides per read whether stdin is a terminal. Interactive reads
run on a daemon 'getline' thread so the run loop can keep observing
cancellation while the editor owns the terminal, and a read the editor
cannot abort never holds up interpreter exit.
"""

import logging
import sys
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeout
from pathlib import Path
from typing import Callable, Optional

from rpc_console.errors import END_OF_INPUT, EndOfInput
from rpc_console.interface.completion import CompletionEngine
from rpc_console.ui import write_text

logger = logging.getLogger(__name__)

# History location in the user home directory
HISTORY_FILE_PATH = Path.home() / ".rpc_console_history"


class BaseLineEditor:
    """
    Base interface for terminal line editors.

    Subclasses implement:
        - setup(engine): install completion hooks (engine may be None)
        - read_line(prompt): one line; EOFError at end of input,
          KeyboardInterrupt on Ctrl-C
        - interrupt(): abort an in-flight read_line() if the editor can
        - teardown()
    """

    def setup(self, engine: Optional[CompletionEngine]) -> None:  # pragma: no cover - interface
        ...

    def read_line(self, prompt: str) -> str:  # pragma: no cover - interface
        raise EOFError

    def interrupt(self) -> None:
        ...

    def teardown(self) -> None:  # pragma: no cover - interface
        ...


# ===== Preferred: prompt_toolkit =====
class PromptToolkitEditor(BaseLineEditor):
    """Rich line editor with history and method-name completion."""

    def __init__(self, history_path: Optional[Path] = HISTORY_FILE_PATH) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit.history import FileHistory, InMemoryHistory

        self._session_cls = PromptSession
        self._history = FileHistory(str(history_path)) if history_path else InMemoryHistory()
        self._history_path = history_path
        self._session = None

    def setup(self, engine: Optional[CompletionEngine]) -> None:
        if self._history_path is not None:
            self._history_path.touch(exist_ok=True)
        completer = make_prompt_toolkit_completer(engine) if engine is not None else None
        self._session = self._session_cls(
            history=self._history,
            completer=completer,
            complete_while_typing=False,
        )

    def read_line(self, prompt: str) -> str:
        # runs off the main thread, so no SIGINT handler installation
        return self._session.prompt(prompt, handle_sigint=False)

    def interrupt(self) -> None:
        app = getattr(self._session, "app", None)
        if app is None or not app.is_running:
            return
        loop = getattr(app, "loop", None)
        if loop is not None:
            loop.call_soon_threadsafe(lambda: app.exit(exception=EOFError))

    def teardown(self) -> None:
        # prompt_toolkit flushes history automatically
        pass


def make_prompt_toolkit_completer(engine: CompletionEngine):
    """Adapt the engine to prompt_toolkit's Completer protocol."""
    from prompt_toolkit.completion import Completer, Completion

    class _MethodCompleter(Completer):
        def get_completions(self, document, complete_event):
            token = document.text_before_cursor
            result = engine.complete(token)
            if result.unique:
                # append the rest of the only match
                yield Completion(result.suffix, start_position=0, display=token + result.suffix)
                return
            for name in engine.candidates(token):
                yield Completion(name, start_position=-len(token))

    return _MethodCompleter()


# ===== Fallback: readline =====
class ReadlineEditor(BaseLineEditor):
    """
    Fallback editor with basic completion and history.

    input() cannot be aborted from another thread, so interrupt() is a no-op:
    after stop() the pending read is abandoned on its daemon thread.
    """

    def __init__(self, history_path: Optional[Path] = HISTORY_FILE_PATH) -> None:
        import readline

        self.readline = readline
        self._history_path = history_path
        self._engine: Optional[CompletionEngine] = None
        self._matches: list[str] = []

    def setup(self, engine: Optional[CompletionEngine]) -> None:
        if self._history_path is not None:
            self._history_path.touch(exist_ok=True)
            try:
                self.readline.read_history_file(str(self._history_path))
            except OSError:
                pass

        self._engine = engine
        if engine is None:
            return
        # complete against the whole line up to the cursor
        self.readline.set_completer_delims("")
        self.readline.set_completer(self.complete)
        if "libedit" in (self.readline.__doc__ or ""):
            self.readline.parse_and_bind("bind ^I rl_complete")
        else:
            self.readline.parse_and_bind("tab: complete")

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer: state 0 computes matches, later states index them."""
        if state == 0:
            result = self._engine.complete(text)
            if result.unique:
                self._matches = [text + result.suffix]
            else:
                self._matches = self._engine.candidates(text)
        return self._matches[state] if state < len(self._matches) else None

    def read_line(self, prompt: str) -> str:
        # input() records history once readline is imported
        return input(prompt)

    def teardown(self) -> None:
        if self._history_path is None:
            return
        try:
            self.readline.write_history_file(str(self._history_path))
        except OSError:
            pass


def make_line_editor(history_path: Optional[Path] = HISTORY_FILE_PATH) -> Optional[BaseLineEditor]:
    """
    Factory to select the best available line editor at runtime.
    Returns None when neither editor can be loaded.
    """
    try:
        return PromptToolkitEditor(history_path)
    except ImportError:
        pass
    try:
        return ReadlineEditor(history_path)
    except ImportError:
        logger.debug("no line editor available; using plain reads")
        return None


class LineReader:
    """Yields one line per call from the interactive editor or a plain stream."""

    def __init__(
        self,
        engine: Optional[CompletionEngine],
        *,
        stdin=None,
        stdout=None,
        editor_factory: Callable[[], Optional[BaseLineEditor]] = make_line_editor,
        poll_interval: float = 0.1,
    ) -> None:
        self._engine = engine
        self._stdin = stdin
        self._stdout = stdout
        self._editor_factory = editor_factory
        self._editor: Optional[BaseLineEditor] = None
        self._editor_resolved = False
        self._pending: Optional[Future] = None
        self.poll_interval = poll_interval

    @property
    def stdin(self):
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    def is_interactive(self) -> bool:
        """True when the input stream is attached to a terminal."""
        isatty = getattr(self.stdin, "isatty", None)
        try:
            return bool(isatty and isatty())
        except ValueError:
            return False

    def _resolve_editor(self) -> Optional[BaseLineEditor]:
        if not self._editor_resolved:
            self._editor_resolved = True
            self._editor = self._editor_factory()
            if self._editor is not None:
                self._editor.setup(self._engine)
        return self._editor

    def read_line(
        self,
        prompt: str,
        cancelled: Callable[[], bool] = lambda: False,
    ) -> str | EndOfInput:
        """
        Return the next line without its newline, or END_OF_INPUT.

        `cancelled` is polled while an interactive read is in flight.
        """
        # decided per call so redirected input is honored mid-session
        if self.is_interactive():
            editor = self._resolve_editor()
            if editor is not None:
                return self._read_interactive(editor, prompt, cancelled)
        return self._read_plain(prompt)

    def _read_interactive(
        self,
        editor: BaseLineEditor,
        prompt: str,
        cancelled: Callable[[], bool],
    ) -> str | EndOfInput:
        # editors write to the terminal directly
        self.stdout.flush()
        if self._pending is None or self._pending.done():
            self._pending = self._start_read(editor, prompt)
        future = self._pending

        while True:
            try:
                line = future.result(timeout=self.poll_interval)
            except FuturesTimeout:
                if cancelled():
                    editor.interrupt()
                    return END_OF_INPUT
                continue
            except (EOFError, KeyboardInterrupt):
                return END_OF_INPUT
            return line

    @staticmethod
    def _start_read(editor: BaseLineEditor, prompt: str) -> Future:
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(editor.read_line(prompt))
            except BaseException as exc:
                # EOFError and KeyboardInterrupt are results for the caller
                future.set_exception(exc)

        threading.Thread(target=run, name="getline", daemon=True).start()
        return future

    def _read_plain(self, prompt: str) -> str | EndOfInput:
        write_text(prompt, file=self.stdout)
        line = self.stdin.readline()
        if not line:
            return END_OF_INPUT
        return line.rstrip("\r\n")

    def interrupt(self) -> None:
        """Ask the editor to abort an in-flight read (no-op for plain reads)."""
        if self._editor is not None and self._pending is not None and not self._pending.done():
            self._editor.interrupt()

    def close(self) -> None:
        if self._editor is not None:
            self._editor.teardown()
