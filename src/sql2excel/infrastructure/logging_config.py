"""
Logging configuration module.

Console output is colored by level; an optional log file gets plain
text with full timestamps and always records DEBUG.
"""

import logging
import sys
from pathlib import Path

RESET = "\033[0m"

# Level -> ANSI style for the console level tag
LEVEL_STYLES = {
    logging.DEBUG: "\033[2;37m",  # dim gray
    logging.INFO: "\033[36m",  # cyan
    logging.WARNING: "\033[33m",  # yellow: link fallbacks, missing release files
    logging.ERROR: "\033[91m",  # bright red
    logging.CRITICAL: "\033[1;37;41m",  # white on red
}
NAME_STYLE = "\033[2m"

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
FILE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("pyodbc", "openpyxl")


def short_logger_name(name: str) -> str:
    """sql2excel.infrastructure.excel.toc -> excel.toc"""
    parts = name.split(".")
    if parts[0] != "sql2excel" or len(parts) <= 2:
        return name
    return ".".join(parts[-2:])


class ColoredFormatter(logging.Formatter):
    """
    Console formatter: padded, colored level tag and a short, dimmed
    logger name. The record is restored afterwards so the file handler
    still sees the plain values.
    """

    def __init__(self, fmt: str, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        saved = record.levelname, record.name

        name = short_logger_name(record.name)
        if self.use_colors:
            style = LEVEL_STYLES.get(record.levelno, "")
            record.levelname = f"{style}{record.levelname:8}{RESET}"
            record.name = f"{NAME_STYLE}{name}{RESET}"
        else:
            record.levelname = f"{record.levelname:8}"
            record.name = name

        try:
            return super().format(record)
        finally:
            record.levelname, record.name = saved


def _enable_windows_ansi() -> bool:
    """Turn on VT processing for the Windows console. Returns success."""
    if sys.platform != "win32":
        return True
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32
        # processed output | wrap at EOL | virtual terminal processing
        return bool(kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7))
    except (AttributeError, OSError):
        return False


def setup_logging(
    level: int = logging.INFO,
    log_file: str | None = None,
    quiet_loggers: tuple[str, ...] = NOISY_LOGGERS,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Console logging level (logging.DEBUG, logging.INFO, ...)
        log_file: Optional path to a log file (parent folders are created)
        quiet_loggers: Library loggers raised to WARNING
    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(
            CONSOLE_FORMAT,
            datefmt="%H:%M:%S",
            use_colors=sys.stdout.isatty() and _enable_windows_ansi(),
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("SQL2Excel logging initialized (console=%s, file=%s)",
                 logging.getLevelName(level), log_file or "-")
