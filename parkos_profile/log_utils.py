"""Logging-related utilities.

This module intentionally has *no* heavy dependencies so it can be reused by
both the GUI and the CLI.
"""

from __future__ import annotations

import logging
import re
import sys
import threading
from pathlib import Path
from typing import Optional, Union

from . import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILENAME = "gui.log"

# A reasonably complete ANSI escape sequence matcher (CSI + single-character).
_ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

# 12..19 digits, optionally grouped by spaces or dashes.
_CARD_RE = re.compile(r"\b\d(?:[ -]?\d){11,18}\b")


def mask_secret(value: str, *, keep: int = 4, fill: str = "•") -> str:
    """Mask all but the last *keep* characters of *value*.

    Separators are dropped, so ``"4111 1111 1111 1111"`` becomes
    ``"••••••••••••1111"``.
    """

    if not value:
        return ""
    compact = re.sub(r"[\s-]+", "", value)
    if len(compact) <= keep:
        return fill * len(compact)
    return fill * (len(compact) - keep) + compact[-keep:]


def redact_card_numbers(text: str) -> str:
    """Replace anything shaped like a card number in free text."""

    if not text:
        return ""
    return _CARD_RE.sub(lambda m: mask_secret(m.group(0)), text)


def sanitize_log(text: str) -> str:
    """Sanitize captured logs for display in the Logs tab.

    - Normalize carriage returns (``\r``) into newlines (``\n``).
    - Strip ANSI escape sequences (colors, cursor movement, etc.).
    - Redact card-number-shaped digit runs.
    """

    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _ANSI_ESCAPE_RE.sub("", text)
    return "\n".join(redact_card_numbers(line) for line in text.split("\n"))


def setup_gui_logging(log_dir: Union[str, Path], level: Union[int, str] = logging.INFO) -> Optional[str]:
    """Configure logging to a persistent file under *log_dir*.

    The GUI is often started without a visible console. A log file helps debug
    crashes. Returns the log path, or ``None`` if the file could not be set up.
    """

    try:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILENAME

        # Don't clobber an existing logging configuration (e.g. when embedded).
        root = logging.getLogger()
        if not root.handlers:
            logging.basicConfig(
                level=level,
                format=LOG_FORMAT,
                handlers=[
                    logging.FileHandler(str(log_path), mode="a", encoding="utf-8"),
                    logging.StreamHandler(sys.stdout),
                ],
            )
    except OSError:
        logging.getLogger(__name__).exception("Could not set up GUI log file in %s", log_dir)
        return None

    # Hook unhandled exceptions so we get a traceback in the log file.
    def _excepthook(exc_type, exc, tb):
        logging.error("Unhandled exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        logging.error("Unhandled thread exception", exc_info=(args.exc_type, args.exc_value, args.exc_traceback))

    threading.excepthook = _thread_excepthook

    logging.info("GUI started (v%s)", __version__)
    return str(log_path)


__all__ = [
    "LOG_FILENAME",
    "LOG_FORMAT",
    "mask_secret",
    "redact_card_numbers",
    "sanitize_log",
    "setup_gui_logging",
]
