"""
Color-coded logging utilities for the receiver.

Console banners for the server lifecycle plus a logger factory that writes
colored lines to stdout and plain lines to logs/receiver.log.
Uses colorama for cross-platform terminal color support.
"""

import datetime
import logging
import os
import sys

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for console output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    DIM = Style.DIM
    RESET = Style.RESET_ALL


LEVEL_COLORS = {
    logging.DEBUG: C.DIM,
    logging.INFO: "",
    logging.WARNING: C.WARN,
    logging.ERROR: C.ERR,
    logging.CRITICAL: C.ERR,
}


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Console banners
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def info(msg: str) -> None:
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def err(msg: str) -> None:
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


# ---------------------------------------------------------------------------
# Verbose logging setup
# ---------------------------------------------------------------------------

class ColorFormatter(logging.Formatter):
    """Formatter that wraps each console line in its level's color."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{line}{C.RESET}" if color else line


def setup_verbose_logging(name: str = "receiver", level: int = logging.DEBUG) -> logging.Logger:
    """
    Create a verbose logger that writes to both console and logs/receiver.log.
    """
    from api.config import settings

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if logger.handlers:
        return logger

    fmt = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console handler (INFO+)
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.INFO)
    ch.setFormatter(ColorFormatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File handler (DEBUG+)
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fh = logging.FileHandler(os.path.join(settings.LOG_DIR, settings.LOG_FILE))
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
