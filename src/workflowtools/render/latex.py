"""
Markdown to LaTeX conversion through pandoc.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import ToolConfig
from ..errors import RenderError, RendererNotFoundError, WriteError
from ..templates import DEFAULT_TEMPLATE, get_template, template_path
from ..util import ensure_directory

logger = logging.getLogger(__name__)

PANDOC_EXECUTABLE = "pandoc"
SUPPORT_EXTENSIONS = {
    ".bib",
    ".bst",
    ".cls",
    ".sty",
    ".png",
    ".jpg",
    ".jpeg",
    ".pdf",
    ".eps",
    ".tif",
    ".tiff",
}


@dataclass
class ConversionResult:
    """
    Outputs of a markdown-to-LaTeX conversion.

    Attributes:
        source: The markdown / R Markdown input.
        tex: The LaTeX file written by pandoc.
        archive: Zip archive bundling the LaTeX with its support files, if requested.
        support_files: Files placed in the archive alongside the LaTeX.
    """
    source: Path
    tex: Path
    archive: Optional[Path] = None
    support_files: List[Path] | None = None

    def summary_rows(self):
        yield ("Source", str(self.source))
        yield ("LaTeX", str(self.tex))
        yield ("Archive", str(self.archive) if self.archive else "not requested")
        if self.support_files is not None:
            yield ("Support files", str(len(self.support_files)))


def resolve_pandoc(explicit: Optional[Path | str] = None, config: Optional[ToolConfig] = None) -> Path:
    """
    Locate the pandoc executable.

    Checks the explicit argument, then the configured path, then PATH.

    Raises:
        RendererNotFoundError: If no executable can be found.
    """
    candidate = explicit or (config.pandoc if config else None)
    if candidate:
        path = Path(candidate).expanduser()
        if path.is_file():
            return path.resolve()
        found = shutil.which(str(candidate))
        if found:
            return Path(found)
        raise RendererNotFoundError(f"pandoc executable not found at {path}")
    found = shutil.which(PANDOC_EXECUTABLE)
    if not found:
        raise RendererNotFoundError("pandoc not found on PATH; install it or set `pandoc` in the configuration.")
    return Path(found)


def build_pandoc_command(pandoc: Path, source: Path, output: Path, latex_template: Optional[Path]) -> List[str]:
    command = [
        str(pandoc),
        str(source),
        "--from",
        "markdown",
        "--to",
        "latex",
        "--standalone",
        "--natbib",
    ]
    if latex_template is not None:
        command.extend(["--template", str(latex_template)])
    command.extend(["--output", str(output)])
    return command


def markdown_to_latex(
    source: Path | str,
    output: Optional[Path | str] = None,
    *,
    template: str = DEFAULT_TEMPLATE,
    compress: bool = False,
    pandoc: Optional[Path | str] = None,
    timeout: Optional[float] = None,
    config: Optional[ToolConfig] = None,
) -> ConversionResult:
    """
    Convert a markdown or R Markdown article into a standalone LaTeX file.

    Args:
        source: The article to convert.
        output: Destination .tex file (defaults to the source name with a .tex suffix).
        template: Registered template whose LaTeX layout should be used.
        compress: Also bundle the LaTeX and its support files into a zip archive.
        pandoc: Explicit path to pandoc.
        timeout: Seconds to wait for pandoc (defaults to config.render_timeout).
        config: Settings providing the pandoc path and timeout.

    Returns:
        A ConversionResult naming the produced files.

    Raises:
        UnknownTemplateError: If template is not registered.
        RendererNotFoundError: If pandoc cannot be located.
        RenderError: If the source is missing, pandoc fails, or no output appears.
    """
    config = config or ToolConfig()
    source_path = Path(source).expanduser().resolve()
    if not source_path.is_file():
        raise RenderError(f"Source document not found: {source_path}")

    article = get_template(template)
    tex_path = Path(output).expanduser().resolve() if output else source_path.with_suffix(".tex")
    executable = resolve_pandoc(pandoc, config)
    limit = timeout if timeout is not None else config.render_timeout

    ensure_directory(tex_path.parent)

    if article.latex_template:
        with template_path(article, article.latex_template) as latex_template:
            _run_pandoc(executable, source_path, tex_path, latex_template, limit)
    else:
        _run_pandoc(executable, source_path, tex_path, None, limit)

    if not tex_path.is_file():
        raise RenderError(f"pandoc finished but {tex_path} was not written")
    logger.info("Converted %s -> %s", source_path, tex_path)

    result = ConversionResult(source=source_path, tex=tex_path)
    if compress:
        support = collect_support_files(source_path.parent, exclude={tex_path})
        result.archive = write_archive(tex_path, support, base_dir=source_path.parent)
        result.support_files = support
    return result


def _run_pandoc(pandoc: Path, source: Path, output: Path, latex_template: Optional[Path], timeout: float) -> None:
    command = build_pandoc_command(pandoc, source, output, latex_template)
    logger.debug("Running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            cwd=source.parent,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise RenderError(f"pandoc timed out after {timeout:g}s converting {source}") from exc
    except OSError as exc:
        raise RendererNotFoundError(f"Unable to run {pandoc}: {exc}") from exc

    if completed.returncode != 0:
        raise RenderError(
            f"pandoc exited with status {completed.returncode} converting {source}",
            stderr=completed.stderr,
        )
    if completed.stderr:
        logger.warning("pandoc reported: %s", completed.stderr.strip())


def collect_support_files(directory: Path, *, exclude: set[Path] | None = None) -> List[Path]:
    """
    Find bibliographies, figures and style files below directory.

    Hidden files and directories are skipped.
    """
    skipped = exclude or set()
    found: List[Path] = []
    for candidate in sorted(directory.rglob("*")):
        if not candidate.is_file() or candidate in skipped:
            continue
        relative = candidate.relative_to(directory)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if candidate.suffix.lower() in SUPPORT_EXTENSIONS:
            found.append(candidate)
    return found


def write_archive(tex: Path, support: List[Path], *, base_dir: Path) -> Path:
    """
    Bundle the LaTeX file and its support files into `<tex stem>.zip`.

    Support files keep their layout relative to base_dir; the LaTeX file sits
    at the archive root.
    """
    archive = tex.with_suffix(".zip")
    try:
        with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as bundle:
            bundle.write(tex, tex.name)
            for path in support:
                bundle.write(path, path.relative_to(base_dir).as_posix())
    except OSError as exc:
        raise WriteError(archive, exc) from exc
    logger.info("Bundled %d support files into %s", len(support), archive)
    return archive
