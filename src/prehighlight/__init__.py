"""prehighlight - syntax highlighting for code blocks in rendered HTML.

Finds ``<pre><code>`` blocks in an HTML document, highlights their source
with Pygments and splices the annotated markup back into the document.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

_CONSOLE_HANDLER = "prehighlight.console"
_FILE_HANDLER = "prehighlight.file"
_HANDLER_NAMES = (_CONSOLE_HANDLER, _FILE_HANDLER)


def setup_logging(level: str = "WARNING", log_dir: Path | None = None) -> None:
    """Configure logging to stderr and, optionally, a rotating file.

    Stdout is reserved for the rewritten document, so the console handler
    always writes to stderr.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_dir is not None else level)

    # Repeated calls (tests, embedding) replace our handlers instead of stacking.
    for handler in list(root_logger.handlers):
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.set_name(_CONSOLE_HANDLER)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "prehighlight.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.set_name(_FILE_HANDLER)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    logging.debug("Logging configured. Log file: %s", log_file.absolute())
