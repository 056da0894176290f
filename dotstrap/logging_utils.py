from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "~/Library/Logs/dotfiles_setup.log"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class Colors:
    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    CYAN = "\033[36m"
    DIM = "\033[2m"


class ConsoleFormatter(logging.Formatter):
    """Short, colored console lines; the log file keeps the full record."""

    _prefixes = {
        logging.DEBUG: (Colors.DIM, "Debug:"),
        logging.INFO: (Colors.CYAN, "Processing:"),
        SUCCESS: (Colors.GREEN, "✓ Success:"),
        logging.WARNING: (Colors.YELLOW, "⚠ Warning:"),
        logging.ERROR: (Colors.RED, "✗ Error:"),
        logging.CRITICAL: (Colors.RED, "✗ Error:"),
    }

    def __init__(self, *, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color, prefix = self._prefixes.get(record.levelno, ("", ""))
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if not self.use_color:
            return f"{prefix} {message}"
        if record.levelno == logging.INFO:
            return f"{color}{prefix} {message}{Colors.RESET}"
        return f"{color}{prefix}{Colors.RESET} {message}"


def success(logger: logging.Logger, msg: str, *args: object) -> None:
    logger.log(SUCCESS, msg, *args)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every decision goes to the log file; the console gets a colored summary.

    Notes:
    - If the log directory cannot be created or written, we fall back to a
      file in the current working directory and report that path instead.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(min(level, logging.INFO))

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_dotstrap_configured", False):
        return getattr(logger, "_dotstrap_log_path", log_path)

    requested = os.path.expanduser(log_path)
    chosen_path = requested
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested, encoding="utf-8")
    except OSError:
        fallback = str(Path.cwd() / "dotfiles_setup.log")
        file_handler = logging.FileHandler(fallback, encoding="utf-8")
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_dotstrap_configured", True)
    setattr(logger, "_dotstrap_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
