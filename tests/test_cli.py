from pathlib import Path

import pytest
from typer.testing import CliRunner

from workflowtools import cli
from workflowtools.api import RemoteProject


def test_create_command_scaffolds_package(runner: CliRunner, tmp_path: Path, sample_config: dict) -> None:
    root = tmp_path / "MyWorkflow"

    result = runner.invoke(cli.app, ["--config", str(sample_config["path"]), "create", str(root)])

    assert result.exit_code == 0, result.output
    assert (root / "vignettes" / "MyWorkflow.Rmd").exists()
    assert "Version: 1.2.3" in (root / "DESCRIPTION").read_text(encoding="utf-8")
    assert "Scaffold Summary" in result.output


def test_create_twice_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    root = tmp_path / "MyWorkflow"
    assert runner.invoke(cli.app, ["create", str(root)]).exit_code == 0

    result = runner.invoke(cli.app, ["create", str(root)])

    assert result.exit_code == 1
    assert "Refusing to write" in result.output


def test_draft_unknown_template_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["draft", str(tmp_path / "article"), "--template", "missing"])

    assert result.exit_code == 1
    assert "Unknown template" in result.output
    assert list(tmp_path.iterdir()) == []


def test_draft_command_writes_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["draft", str(tmp_path / "article"), "-t", "bioc_workflow"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "article.Rmd").exists()


def test_templates_command_lists_registry(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["templates"])

    assert result.exit_code == 0
    assert "f1000_article" in result.output
    assert "bioc_workflow" in result.output


def test_upload_command_prints_project(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_upload(source, *, open_in_browser, config):
        seen["source"] = source
        seen["open"] = open_in_browser
        return RemoteProject(project_id="abc123", url="https://overleaf.test/project/abc123", files=["a.tex"])

    monkeypatch.setattr(cli, "upload_to_overleaf", fake_upload)

    result = runner.invoke(cli.app, ["upload", str(tmp_path), "--no-open"])

    assert result.exit_code == 0, result.output
    assert "abc123" in result.output
    assert seen == {"source": tmp_path, "open": False}


def test_missing_config_file_is_rejected(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["--config", str(tmp_path / "absent.toml"), "templates"])

    assert result.exit_code != 0
