"""Process-wide logging setup for the command line tools."""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", *, console: Optional[Console] = None) -> None:
    """Route every ``logging`` record through a rich handler on stderr."""

    normalized_level = getattr(logging, level.upper(), logging.INFO)
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(normalized_level)
    root_logger.addHandler(handler)

    # aiohttp logs every reconnect attempt at INFO; keep the stream readable.
    logging.getLogger("aiohttp").setLevel(max(normalized_level, logging.WARNING))
