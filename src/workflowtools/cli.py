"""
Command line interface for authoring workflow articles.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .api import upload_to_overleaf
from .config import ConfigError, ToolConfig, discover_config
from .errors import WorkflowToolsError
from .render import markdown_to_latex
from .scaffold import create_workflow
from .templates import draft_from_template, list_templates

console = Console()
app = typer.Typer(help="Scaffold, draft, convert and upload literate workflow articles.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


class _State:
    config_path: Optional[Path] = None


state = _State()


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("WORKFLOWTOOLS_LOG_LEVEL")
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure an explicit config path exists and return the absolute path."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit() -> ToolConfig:
    try:
        return discover_config(state.config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _fail(exc: WorkflowToolsError) -> None:
    logger.debug("Command failed", exc_info=exc)
    console.print(f"[bold red]Error:[/] {exc}")
    raise typer.Exit(code=1) from exc


def _print_rows(title: str, rows: Iterable[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show workflowtools version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML configuration file (defaults to ./workflowtools.toml when present).",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)
    state.config_path = config

    if version:
        console.print(f"[bold green]workflowtools[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]workflowtools[/] is ready. Run [cyan]workflowtools create path/to/MyWorkflow[/] "
            "to start a new workflow package.",
        )


@app.command()
def create(
    path: Path = typer.Argument(..., help="Directory for the new workflow package; its name becomes the package name."),
    open_editor: bool = typer.Option(
        False,
        "--open/--no-open",
        help="Open the starter document once the package is created.",
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template for the starter document (defaults to the configured template).",
    ),
) -> None:
    """
    Create a workflow package skeleton with metadata and a starter article.
    """
    tool_config = _load_config_or_exit()
    try:
        report = create_workflow(path, open_editor=open_editor, config=tool_config, template=template)
    except WorkflowToolsError as exc:
        _fail(exc)
    _print_rows("Scaffold Summary", report.summary_rows())
    console.print(f"[bold green]Workflow package ready:[/] {report.root}")


@app.command()
def draft(
    file: Path = typer.Argument(..., help="Article file to create (.Rmd is appended unless the name already ends with it)."),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template to copy (see `workflowtools templates`).",
    ),
    edit: bool = typer.Option(
        False,
        "--edit",
        help="Open the new draft in the default editor.",
    ),
    resources: bool = typer.Option(
        True,
        "--resources/--no-resources",
        help="Copy the template's supporting files (bibliography etc.) next to the draft.",
    ),
) -> None:
    """
    Start a new article from a bundled template.
    """
    tool_config = _load_config_or_exit()
    try:
        written = draft_from_template(
            file,
            template or tool_config.default_template,
            open_editor=edit,
            with_resources=resources,
        )
    except WorkflowToolsError as exc:
        _fail(exc)
    console.print(f"[bold green]Draft written:[/] {written}")


@app.command("templates")
def templates_command() -> None:
    """
    List the bundled article templates.
    """
    table = Table(title="Article Templates")
    table.add_column("Name")
    table.add_column("Description", overflow="fold")
    table.add_column("Files", overflow="fold")
    for article in list_templates():
        table.add_row(article.name, article.description, ", ".join(article.files()))
    console.print(table)


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Markdown or R Markdown article to convert."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="LaTeX file to write (defaults to the source name with .tex).",
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Template whose LaTeX layout is used.",
    ),
    compress: bool = typer.Option(
        False,
        "--compress",
        help="Also bundle the LaTeX with bibliographies and figures into a zip archive.",
    ),
) -> None:
    """
    Convert an article to LaTeX with pandoc for journal submission.
    """
    tool_config = _load_config_or_exit()
    try:
        result = markdown_to_latex(
            source,
            output,
            template=template or tool_config.default_template,
            compress=compress,
            config=tool_config,
        )
    except WorkflowToolsError as exc:
        _fail(exc)
    _print_rows("Conversion Summary", result.summary_rows())


@app.command()
def upload(
    source: Path = typer.Argument(..., help="Directory (or single file) to upload as a new Overleaf project."),
    open_browser: bool = typer.Option(
        True,
        "--open/--no-open",
        help="Open the new project in the default browser.",
    ),
) -> None:
    """
    Upload article sources to Overleaf as a new project.
    """
    tool_config = _load_config_or_exit()
    console.print(f"[yellow]Uploading {source} to {tool_config.overleaf_url}...[/]")
    try:
        project = upload_to_overleaf(source, open_in_browser=open_browser, config=tool_config)
    except WorkflowToolsError as exc:
        _fail(exc)
    _print_rows(
        "Upload Summary",
        [
            ("Project", project.project_id),
            ("URL", project.url),
            ("Files", str(len(project.files))),
        ],
    )


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
