"""
Generate the directory layout required for publishing a workflow package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import ToolConfig
from ..errors import DestinationExistsError, InvalidNameError
from ..templates import DEFAULT_TEMPLATE, get_template, read_template_bytes
from ..util import is_empty_directory, is_valid_package_name, one_line, open_target, r_string, staged_directory, write_bytes_file, write_text_file

logger = logging.getLogger(__name__)

DESCRIPTION_FILENAME = "DESCRIPTION"
VIGNETTES_DIRNAME = "vignettes"

DESCRIPTION_TEMPLATE = """Package: {name}
Title: Replace with a one-line title for the {name} workflow
Version: {version}
Authors@R: person("{given}", "{family}", email = "{email}", role = c("aut", "cre"))
Description: Replace with a paragraph describing what the {name} workflow
    demonstrates and which data it uses.
License: {license}
Encoding: UTF-8
Depends: R (>= 4.0.0)
Suggests: knitr, rmarkdown
VignetteBuilder: knitr
biocViews: Workflow
"""


@dataclass
class ScaffoldReport:
    """
    Stores what was produced when a workflow package was scaffolded.

    Attributes:
        root: The package directory.
        name: Package name derived from the directory name.
        template: Template used for the starter document.
        files_written: Every file created, in creation order.
        opened: True if the starter document was handed to an editor.
    """
    root: Path
    name: str
    template: str
    files_written: List[Path] = field(default_factory=list)
    opened: bool = False

    @property
    def description(self) -> Path:
        return self.root / DESCRIPTION_FILENAME

    @property
    def vignettes(self) -> Path:
        return self.root / VIGNETTES_DIRNAME

    @property
    def starter_document(self) -> Path:
        return self.vignettes / f"{self.name}{get_template(self.template).extension}"

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Package", self.name)
        yield ("Root", str(self.root))
        yield ("Template", self.template)
        yield ("Starter document", str(self.starter_document))
        yield ("Files written", str(len(self.files_written)))
        yield ("Opened in editor", "yes" if self.opened else "no")


def render_description(name: str, config: ToolConfig) -> str:
    """
    Fill the DESCRIPTION metadata template for a new package.
    """
    return DESCRIPTION_TEMPLATE.format(
        name=name,
        version=config.version,
        given=r_string(config.author_given),
        family=r_string(config.author_family),
        email=r_string(config.author_email),
        license=one_line(config.license),
    )


def check_destination(root: Path) -> None:
    """
    Refuse destinations that already hold files.

    Raises:
        DestinationExistsError: If root is a file or a non-empty directory.
    """
    if not root.exists():
        return
    if not root.is_dir():
        raise DestinationExistsError(root, "a file with that name exists")
    if not is_empty_directory(root):
        raise DestinationExistsError(root, "directory is not empty")


def create_workflow(
    path: Path | str,
    *,
    open_editor: bool = False,
    config: Optional[ToolConfig] = None,
    template: Optional[str] = None,
) -> ScaffoldReport:
    """
    Create a workflow package skeleton at path.

    The package name is the last component of path. The layout is assembled in
    a staging directory and moved into place, so a failed run leaves nothing
    behind.

    Args:
        path: Directory to create. It may exist only if it is empty.
        open_editor: Open the starter document once the package exists.
        config: Settings providing author and version defaults.
        template: Template for the starter document (defaults to the configured one).

    Returns:
        A ScaffoldReport describing the files created.

    Raises:
        InvalidNameError: If the directory name is not a valid package name.
        DestinationExistsError: If path already holds files.
        UnknownTemplateError: If the template is not registered.
        WriteError: If any part of the layout cannot be written.
    """
    config = config or ToolConfig()
    root = Path(path).expanduser().resolve()
    name = root.name
    if not is_valid_package_name(name):
        raise InvalidNameError(
            f"'{name}' is not a valid package name: use letters, digits and dots, "
            "starting with a letter and not ending with a dot."
        )
    article = get_template(template or config.default_template or DEFAULT_TEMPLATE)
    check_destination(root)

    report = ScaffoldReport(root=root, name=name, template=article.name)
    relative: List[Path] = []
    with staged_directory(root) as staging:
        write_text_file(staging / DESCRIPTION_FILENAME, render_description(name, config))
        relative.append(Path(DESCRIPTION_FILENAME))

        starter = Path(VIGNETTES_DIRNAME) / f"{name}{article.extension}"
        write_bytes_file(staging / starter, read_template_bytes(article, article.skeleton), exclusive=True)
        relative.append(starter)

        for resource in article.resources:
            resource_path = Path(VIGNETTES_DIRNAME) / resource
            write_bytes_file(staging / resource_path, read_template_bytes(article, resource), exclusive=True)
            relative.append(resource_path)

    report.files_written = [root / item for item in relative]
    logger.info("Created workflow package %s with %d files", root, len(report.files_written))

    if open_editor:
        report.opened = open_target(report.starter_document)
    return report
