"""
Open generated files and remote projects with the host's default handlers.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

logger = logging.getLogger(__name__)


def open_target(target: Path | str) -> bool:
    """
    Hand a file path or URL to the host's default application.

    Returns:
        True if the launcher reported success.
    """
    logger.info("Opening %s", target)
    status = typer.launch(str(target))
    if status != 0:
        logger.warning("Launcher returned status %s for %s", status, target)
        return False
    return True
