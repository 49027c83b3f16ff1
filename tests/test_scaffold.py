from pathlib import Path

import pytest

from workflowtools.config import ToolConfig
from workflowtools.errors import DestinationExistsError, InvalidNameError, WriteError
from workflowtools.scaffold import create_workflow
from workflowtools.scaffold import package as package_module
from workflowtools.templates import get_template, read_template_bytes


def _tree(root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob("*")}


def test_scaffold_creates_required_layout(tmp_path: Path) -> None:
    root = tmp_path / "MyWorkflow"

    report = create_workflow(root)

    assert _tree(root) == {
        "DESCRIPTION",
        "vignettes",
        "vignettes/MyWorkflow.Rmd",
        "vignettes/sample.bib",
    }
    assert report.name == "MyWorkflow"
    assert report.starter_document == root / "vignettes" / "MyWorkflow.Rmd"
    assert len(report.files_written) == 3
    assert not report.opened


def test_starter_document_has_placeholder_title(tmp_path: Path) -> None:
    root = tmp_path / "MyWorkflow"
    create_workflow(root)

    rmd = root / "vignettes" / "MyWorkflow.Rmd"
    assert rmd.exists()
    text = rmd.read_text(encoding="utf-8")
    assert "title: Replace with the title of your article" in text
    assert rmd.read_bytes() == read_template_bytes(get_template("f1000_article"), "skeleton.Rmd")


def test_description_uses_configured_author(tmp_path: Path) -> None:
    config = ToolConfig(author_given="Ada", author_family="Lovelace", author_email="ada@example.org", version="1.2.3")
    root = tmp_path / "cars.workflow"

    create_workflow(root, config=config)

    description = (root / "DESCRIPTION").read_text(encoding="utf-8")
    assert description.startswith("Package: cars.workflow\n")
    assert "Version: 1.2.3" in description
    assert 'person("Ada", "Lovelace", email = "ada@example.org"' in description
    assert "VignetteBuilder: knitr" in description


def test_description_escapes_quotes_in_author_fields(tmp_path: Path) -> None:
    config = ToolConfig(author_given='Mary "May"', author_family="O\\Brien")
    root = tmp_path / "Quoted"

    create_workflow(root, config=config)

    description = (root / "DESCRIPTION").read_text(encoding="utf-8")
    assert 'person("Mary \\"May\\"", "O\\\\Brien", email = ' in description


def test_second_scaffold_fails_without_touching_files(tmp_path: Path) -> None:
    root = tmp_path / "MyWorkflow"
    create_workflow(root)
    rmd = root / "vignettes" / "MyWorkflow.Rmd"
    rmd.write_text("author edits", encoding="utf-8")
    before = _tree(root)

    with pytest.raises(DestinationExistsError) as exc:
        create_workflow(root)

    assert str(root) in str(exc.value)
    assert _tree(root) == before
    assert rmd.read_text(encoding="utf-8") == "author edits"
    assert [p.name for p in tmp_path.iterdir()] == ["MyWorkflow"]


def test_scaffold_accepts_existing_empty_directory(tmp_path: Path) -> None:
    root = tmp_path / "EmptyWorkflow"
    root.mkdir()

    create_workflow(root)

    assert (root / "DESCRIPTION").exists()
    assert (root / "vignettes" / "EmptyWorkflow.Rmd").exists()


def test_scaffold_into_current_empty_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path / "HereWorkflow"
    root.mkdir()
    monkeypatch.chdir(root)

    report = create_workflow(".")

    assert report.name == "HereWorkflow"
    assert Path.cwd() == root
    assert sorted(p.name for p in Path(".").iterdir()) == ["DESCRIPTION", "vignettes"]
    assert (root / "vignettes" / "HereWorkflow.Rmd").exists()
    assert [p.name for p in tmp_path.iterdir()] == ["HereWorkflow"]


def test_scaffold_refuses_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "Taken"
    target.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DestinationExistsError):
        create_workflow(target)

    assert target.read_text(encoding="utf-8") == "not a directory"


@pytest.mark.parametrize("name", ["1workflow", "my-workflow", "trailing.", "x"])
def test_scaffold_rejects_invalid_package_names(tmp_path: Path, name: str) -> None:
    with pytest.raises(InvalidNameError):
        create_workflow(tmp_path / name)

    assert not (tmp_path / name).exists()


def test_failed_write_leaves_no_partial_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_write(path, payload, *, exclusive=False):
        raise WriteError(Path(path), OSError(28, "No space left on device"))

    monkeypatch.setattr(package_module, "write_bytes_file", broken_write)

    with pytest.raises(WriteError):
        create_workflow(tmp_path / "MyWorkflow")

    assert list(tmp_path.iterdir()) == []


def test_scaffold_opens_starter_document(tmp_path: Path, launched: list) -> None:
    report = create_workflow(tmp_path / "MyWorkflow", open_editor=True)

    assert report.opened
    assert launched == [str(report.starter_document)]


def test_scaffold_with_alternate_template(tmp_path: Path) -> None:
    root = tmp_path / "VignetteOnly"

    create_workflow(root, template="bioc_workflow")

    text = (root / "vignettes" / "VignetteOnly.Rmd").read_text(encoding="utf-8")
    assert "VignetteIndexEntry" in text
