from pathlib import Path

import pytest
import requests

from workflowtools.errors import DestinationExistsError
from workflowtools.util import format_request_exception, staged_directory, write_bytes_file, write_text_file


def test_staged_directory_moves_tree_into_place(tmp_path: Path) -> None:
    target = tmp_path / "pkg"
    with staged_directory(target) as staging:
        (staging / "DESCRIPTION").write_text("Package: pkg\n", encoding="utf-8")

    assert (target / "DESCRIPTION").read_text(encoding="utf-8") == "Package: pkg\n"
    assert [p.name for p in tmp_path.iterdir()] == ["pkg"]


def test_staged_directory_cleans_up_on_error(tmp_path: Path) -> None:
    target = tmp_path / "pkg"
    with pytest.raises(ValueError):
        with staged_directory(target) as staging:
            (staging / "partial").write_text("x", encoding="utf-8")
            raise ValueError("boom")

    assert list(tmp_path.iterdir()) == []


def test_staged_directory_fills_existing_empty_directory(tmp_path: Path) -> None:
    target = tmp_path / "pkg"
    target.mkdir()
    target.chmod(0o750)
    inode = target.stat().st_ino

    with staged_directory(target) as staging:
        (staging / "vignettes").mkdir()
        (staging / "vignettes" / "pkg.Rmd").write_text("---\n", encoding="utf-8")
        (staging / "DESCRIPTION").write_text("Package: pkg\n", encoding="utf-8")

    assert target.stat().st_ino == inode
    assert target.stat().st_mode & 0o777 == 0o750
    assert sorted(p.name for p in target.iterdir()) == ["DESCRIPTION", "vignettes"]
    assert (target / "vignettes" / "pkg.Rmd").exists()
    assert [p.name for p in tmp_path.iterdir()] == ["pkg"]


def test_staged_directory_keeps_empty_target_on_error(tmp_path: Path) -> None:
    target = tmp_path / "pkg"
    target.mkdir()

    with pytest.raises(ValueError):
        with staged_directory(target) as staging:
            (staging / "DESCRIPTION").write_text("x", encoding="utf-8")
            raise ValueError("boom")

    assert target.is_dir()
    assert list(target.iterdir()) == []
    assert [p.name for p in tmp_path.iterdir()] == ["pkg"]


def test_exclusive_bytes_write_refuses_existing(tmp_path: Path) -> None:
    target = tmp_path / "a.bib"
    write_bytes_file(target, b"first", exclusive=True)

    with pytest.raises(DestinationExistsError):
        write_bytes_file(target, b"second", exclusive=True)

    assert target.read_bytes() == b"first"


def test_write_text_file_creates_parents(tmp_path: Path) -> None:
    target = write_text_file(tmp_path / "deep" / "file.txt", "hello")

    assert target.read_text(encoding="utf-8") == "hello"
    assert sorted(p.name for p in target.parent.iterdir()) == ["file.txt"]


def test_format_request_exception_drops_query_string() -> None:
    request = requests.Request("POST", "https://overleaf.test/docs?token=secret").prepare()
    exc = requests.ConnectionError("refused", request=request)

    message = format_request_exception(exc)

    assert "POST https://overleaf.test/docs" in message
    assert "secret" not in message
