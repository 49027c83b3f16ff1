from pathlib import Path
import textwrap
from typing import List

import pytest
import typer
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> List[str]:
    """
    Record targets handed to the host launcher instead of opening them.
    """
    calls: List[str] = []

    def fake_launch(url: str, wait: bool = False, locate: bool = False) -> int:
        calls.append(url)
        return 0

    monkeypatch.setattr(typer, "launch", fake_launch)
    return calls


@pytest.fixture
def sample_config(tmp_path: Path) -> dict:
    """
    Write a small configuration file for tests and return metadata.
    """
    config_text = textwrap.dedent(
        """
        author_given = "Ada"
        author_family = "Lovelace"
        author_email = "ada@example.org"
        license = "MIT + file LICENSE"
        version = "1.2.3"
        overleaf_url = "https://overleaf.test/"
        upload_timeout = 5
        """
    ).strip()
    path = tmp_path / "workflowtools.toml"
    path.write_text(config_text + "\n", encoding="utf-8")
    return {"path": path}
