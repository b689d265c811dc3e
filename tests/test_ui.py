from __future__ import annotations

import io
import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rpc_console.ui import (
    ColorizingStreamHandler,
    colorize,
    format_table,
    init_logger,
    print_line,
    strip_ansi,
    write_text,
)


class TableTests(unittest.TestCase):
    def test_table_with_headers(self) -> None:
        text = format_table([["echo", "Echo values."], ["add", "Sum."]], headers=["Method", "Description"])
        self.assertEqual(
            text.split("\n"),
            [
                "+--------+--------------+",
                "| Method | Description  |",
                "+--------+--------------+",
                "| echo   | Echo values. |",
                "| add    | Sum.         |",
                "+--------+--------------+",
            ],
        )

    def test_coloured_cells_keep_alignment(self) -> None:
        text = format_table([[colorize("ok", "green")], ["fail"]])
        lines = [strip_ansi(line) for line in text.split("\n")]
        self.assertEqual(lines[1], "| ok   |")
        self.assertEqual(lines[2], "| fail |")

    def test_empty_table(self) -> None:
        self.assertEqual(format_table([]), "")


class ConsoleOutputTests(unittest.TestCase):
    def test_print_line_and_write_text(self) -> None:
        out = io.StringIO()
        write_text(">>> ", file=out)
        print_line("result", file=out, flush=True)
        self.assertEqual(out.getvalue(), ">>> result\n")


class LoggerTests(unittest.TestCase):
    def _fresh_logger(self, name: str) -> None:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_stream_handler_strips_colour_for_non_terminals(self) -> None:
        stream = io.StringIO()
        logger = logging.getLogger("rpc_console.tests.stream")
        logger.propagate = False
        handler = ColorizingStreamHandler(stream)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)
        try:
            logger.warning("%s", colorize("careful", "bold"))
        finally:
            logger.removeHandler(handler)
        self.assertEqual(stream.getvalue(), "[WARNING] careful\n")

    def test_init_logger_is_idempotent_and_writes_log_file(self) -> None:
        name = "rpc_console.tests.file"
        self._fresh_logger(name)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "console.log"
            logger = init_logger(name, level=logging.ERROR, logfile=str(path))
            init_logger(name, level=logging.ERROR, logfile=str(path))
            try:
                self.assertEqual(len(logger.handlers), 2)
                self.assertFalse(logger.propagate)
                # file captures debug even when the console level is higher
                self.assertEqual(logger.level, logging.DEBUG)
                logger.debug("loaded %d methods", 3)
                for handler in logger.handlers:
                    handler.flush()
                self.assertIn("[DEBUG] rpc_console.tests.file: loaded 3 methods", path.read_text())
            finally:
                self._fresh_logger(name)

    def test_init_logger_without_file(self) -> None:
        name = "rpc_console.tests.nofile"
        self._fresh_logger(name)
        logger = init_logger(name, level=logging.INFO)
        try:
            self.assertEqual(logger.level, logging.INFO)
            self.assertFalse(any(isinstance(h, RotatingFileHandler) for h in logger.handlers))
        finally:
            self._fresh_logger(name)


if __name__ == "__main__":
    unittest.main()
