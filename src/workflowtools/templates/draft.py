"""
Create a new article draft from a bundled template.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..errors import DestinationExistsError
from ..util import ensure_directory, open_target, write_bytes_file
from .registry import DEFAULT_TEMPLATE, ArticleTemplate, get_template, read_template_bytes

logger = logging.getLogger(__name__)


def resolve_destination(destination: Path | str, template: ArticleTemplate) -> Path:
    """
    Normalise the draft destination, appending the template extension when missing.

    The comparison ignores case, so `article.RMD` is kept as given while
    `cars.workflow` becomes `cars.workflow.Rmd`.
    """
    target = Path(destination).expanduser()
    if target.suffix.lower() != template.extension.lower():
        target = target.with_name(target.name + template.extension)
    return target.resolve()


def draft_from_template(
    destination: Path | str,
    template: str = DEFAULT_TEMPLATE,
    *,
    open_editor: bool = False,
    with_resources: bool = True,
) -> Path:
    """
    Copy a bundled template into place as the start of a new article.

    Args:
        destination: File to create. The template extension is appended if absent.
        template: Registry name of the template.
        open_editor: Open the new draft with the host's default application.
        with_resources: Also copy the template's supporting files next to the draft.

    Returns:
        The path of the written draft.

    Raises:
        UnknownTemplateError: If template is not registered. Nothing is written.
        DestinationExistsError: If destination already exists.
        WriteError: If the draft or a resource cannot be written. Files written
            by this call are removed again.
    """
    article = get_template(template)
    target = resolve_destination(destination, article)

    if target.exists():
        raise DestinationExistsError(target)

    ensure_directory(target.parent)

    write_bytes_file(target, read_template_bytes(article, article.skeleton), exclusive=True)
    if with_resources:
        try:
            copy_template_resources(article, target.parent)
        except Exception:
            target.unlink(missing_ok=True)
            raise
    logger.info("Drafted %s from template '%s'", target, article.name)

    if open_editor:
        open_target(target)
    return target


def copy_template_resources(article: ArticleTemplate, directory: Path) -> List[Path]:
    """
    Copy supporting files for article into directory, keeping existing files.

    If one copy fails, the files already written by this call are removed.

    Returns:
        Paths that were newly written.
    """
    written: List[Path] = []
    try:
        for name in article.resources:
            target = directory / name
            if target.exists():
                logger.info("Keeping existing %s", target)
                continue
            written.append(write_bytes_file(target, read_template_bytes(article, name), exclusive=True))
    except Exception:
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return written
