from __future__ import annotations

import logging
import pathlib
import sys
import threading
import time
import traceback
from typing import Optional, Union

import orjson


LOG_FILE_NAME = "reversi.log"


def get_log_path() -> pathlib.Path:
    return pathlib.Path.cwd() / LOG_FILE_NAME


def setup_logging(
    overwrite: bool = True,
    level: Union[int, str] = logging.DEBUG,
    log_path: Optional[Union[str, pathlib.Path]] = None,
    redirect_stdio: bool = False,
) -> None:
    """Configure root logging to a single file plus STDERR.

    - Overwrites the log file on first setup (per process) if overwrite is True
    - Installs sys.excepthook and threading excepthook
    - Captures warnings via logging
    - Optionally redirects stdout/stderr into logging (off for interactive play,
      where the board is printed to stdout)
    """
    root_logger = logging.getLogger()
    # Prevent duplicate handlers on re-entry
    if getattr(root_logger, "_reversi_logging_configured", False):
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    fmt = "%(asctime)s.%(msecs)03d %(levelname)s [%(process)d:%(threadName)s] %(name)s - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    path = pathlib.Path(log_path) if log_path is not None else get_log_path()
    handlers: list[logging.Handler] = []
    file_handler = logging.FileHandler(path, mode="w" if overwrite else "a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    handlers.append(file_handler)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    # Keep the console readable; the file gets everything
    stderr_handler.setLevel(max(level, logging.INFO))
    handlers.append(stderr_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    root_logger._reversi_logging_configured = True  # type: ignore[attr-defined]

    logging.captureWarnings(True)

    sys.excepthook = _log_unhandled_exception  # type: ignore[assignment]
    threading.excepthook = _log_thread_exception  # type: ignore[assignment]

    if redirect_stdio:
        sys.stdout = _StreamToLogger(logging.getLogger("stdout"), logging.INFO)  # type: ignore[assignment]
        sys.stderr = _StreamToLogger(logging.getLogger("stderr"), logging.ERROR)  # type: ignore[assignment]


def reset_logging() -> None:
    """Drop handlers installed by setup_logging (used by tests and re-configuration)."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    if hasattr(root_logger, "_reversi_logging_configured"):
        del root_logger._reversi_logging_configured  # type: ignore[attr-defined]
    sys.excepthook = sys.__excepthook__
    threading.excepthook = threading.__excepthook__  # type: ignore[attr-defined]
    if isinstance(sys.stdout, _StreamToLogger):
        sys.stdout = sys.__stdout__
    if isinstance(sys.stderr, _StreamToLogger):
        sys.stderr = sys.__stderr__


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line on the ``event.<module>`` logger.
    """
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    line = orjson.dumps(payload, default=str).decode("utf-8")
    logging.getLogger(f"event.{module}").info(line)


def _log_unhandled_exception(exc_type, exc_value, exc_tb) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("unhandled")
    tb_str = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logger.critical("Unhandled exception:\n%s", tb_str)


def _log_thread_exception(args) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("thread")
    tb_str = "".join(traceback.format_exception(args.exc_type, args.exc_value, args.exc_traceback))
    logger.critical("Unhandled thread exception in %s:\n%s", getattr(args, "thread", None), tb_str)


class _StreamToLogger:
    def __init__(self, logger: logging.Logger, level: int) -> None:
        self.logger = logger
        self.level = level
        self._buffer = ""

    def write(self, message: str) -> None:
        self._buffer += message
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            if line:
                self.logger.log(self.level, line)

    def flush(self) -> None:
        if self._buffer:
            self.logger.log(self.level, self._buffer)
            self._buffer = ""
