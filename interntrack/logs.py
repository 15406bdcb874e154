"""
Logging setup.

Modules log through logging.getLogger(__name__). configure_logging() is called
once by the CLI and attaches:
- a rich console handler (WARNING and above by default, so log lines do not
  mix with command output)
- optionally a rotating log file that records everything from DEBUG up
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"


def configure_logging(
    level: str | int = logging.WARNING,
    log_file: Optional[str | Path] = None,
    console: Optional[Console] = None,
) -> None:
    root = logging.getLogger()

    # Only configure once; a second call would duplicate every line
    if any(getattr(h, "_interntrack", False) for h in root.handlers):
        return

    root.setLevel(logging.DEBUG)

    console_handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    console_handler.setLevel(level if isinstance(level, int) else level.upper())
    console_handler._interntrack = True  # type: ignore[attr-defined]
    root.addHandler(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler._interntrack = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging configured")
