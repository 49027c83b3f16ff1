"""
Static registry of bundled article templates.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import UnknownTemplateError

RESOURCE_PACKAGE = "workflowtools.templates"
RESOURCE_DIR = "resources"
DEFAULT_TEMPLATE = "f1000_article"


@dataclass(frozen=True)
class ArticleTemplate:
    """
    A bundled template that can seed a new article.

    Attributes:
        name: Registry key used on the command line.
        description: One-line summary shown by `workflowtools templates`.
        skeleton: File name of the starter document inside the template folder.
        resources: Supporting files copied next to the starter document.
        latex_template: Optional pandoc LaTeX template used when converting.
        extension: Suffix appended to destinations given without one.
    """
    name: str
    description: str
    skeleton: str = "skeleton.Rmd"
    resources: Tuple[str, ...] = ()
    latex_template: Optional[str] = None
    extension: str = ".Rmd"

    def files(self) -> List[str]:
        """All bundled file names belonging to this template."""
        names = [self.skeleton, *self.resources]
        if self.latex_template:
            names.append(self.latex_template)
        return names


TEMPLATES: Dict[str, ArticleTemplate] = {
    template.name: template
    for template in (
        ArticleTemplate(
            name="f1000_article",
            description="Journal article with author, affiliation, abstract and keyword metadata.",
            resources=("sample.bib",),
            latex_template="template.tex",
        ),
        ArticleTemplate(
            name="bioc_workflow",
            description="Workflow package vignette for the documentation-hosting platform.",
            resources=("sample.bib",),
        ),
    )
}


def list_templates() -> List[ArticleTemplate]:
    """Return the registered templates sorted by name."""
    return [TEMPLATES[name] for name in sorted(TEMPLATES)]


def get_template(name: str) -> ArticleTemplate:
    """
    Look up a template by name.

    Raises:
        UnknownTemplateError: If no template is registered under name.
    """
    key = (name or "").strip()
    try:
        return TEMPLATES[key]
    except KeyError as exc:
        raise UnknownTemplateError(key, TEMPLATES) from exc


def template_resource(template: ArticleTemplate, filename: str) -> Traversable:
    """Return the bundled resource for filename inside template's folder."""
    return resources.files(RESOURCE_PACKAGE) / RESOURCE_DIR / template.name / filename


def read_template_bytes(template: ArticleTemplate, filename: str) -> bytes:
    """Read a bundled template file as raw bytes."""
    return template_resource(template, filename).read_bytes()


@contextmanager
def template_path(template: ArticleTemplate, filename: str) -> Iterator[Path]:
    """
    Yield a real filesystem path for a bundled file.

    External tools such as pandoc need a path on disk even when the package is
    installed from a zip archive.
    """
    with resources.as_file(template_resource(template, filename)) as path:
        yield Path(path)
