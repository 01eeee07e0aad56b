"""Logger setup shared by the CLI and embedding agents."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(name)s: %(message)s"


def setup_logger(
    name: Optional[str] = None,
    level: str = "INFO",
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a single RichHandler (stderr) to ``name`` and set its level.

    Calling it again for the same logger only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
