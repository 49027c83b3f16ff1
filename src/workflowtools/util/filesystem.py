"""
Filesystem helpers shared by the scaffold, draft and render modules.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..errors import DestinationExistsError, WriteError

logger = logging.getLogger(__name__)


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(resolved, exc) from exc
    return resolved


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def is_empty_directory(path: Path) -> bool:
    """Return True if path is a directory without any entries."""
    return path.is_dir() and next(path.iterdir(), None) is None


def _atomic_write_text(target: Path, content: str, encoding: str) -> None:
    """Write text atomically by staging a temp file and renaming."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            pass


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8") -> Path:
    """
    Write text to a file, creating parent directories as needed.

    Raises:
        WriteError: If the filesystem rejects the write.
    """
    target = Path(path).expanduser().resolve()
    try:
        _atomic_write_text(target, content, encoding=encoding)
    except OSError as exc:
        raise WriteError(target, exc) from exc
    return target


def write_bytes_file(path: Path | str, payload: bytes, *, exclusive: bool = False) -> Path:
    """
    Write raw bytes to a file, creating parent directories as needed.

    With exclusive=True an existing file is never replaced.

    Raises:
        DestinationExistsError: If exclusive and the file already exists.
        WriteError: If the filesystem rejects the write.
    """
    target = Path(path).expanduser().resolve()
    try:
        _ensure_parent(target)
        with target.open("xb" if exclusive else "wb") as handle:
            handle.write(payload)
    except FileExistsError as exc:
        raise DestinationExistsError(target) from exc
    except OSError as exc:
        raise WriteError(target, exc) from exc
    logger.debug("Wrote %d bytes to %s", len(payload), target)
    return target


@contextmanager
def staged_directory(target: Path) -> Iterator[Path]:
    """
    Yield a scratch directory beside target and move it into place on success.

    A missing target is created by renaming the scratch directory. An existing
    empty directory is kept (it may be the caller's working directory) and the
    staged entries are moved into it. If anything fails, the scratch directory
    is removed and target is left as it was.
    """
    parent = target.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.", suffix=".staging", dir=parent))
        # mkdtemp creates 0700 directories
        staging.chmod(0o755)
    except OSError as exc:
        raise WriteError(parent, exc) from exc

    try:
        yield staging
        if target.exists():
            _move_entries(staging, target)
            staging.rmdir()
        else:
            os.replace(staging, target)
    except OSError as exc:
        shutil.rmtree(staging, ignore_errors=True)
        raise WriteError(target, exc) from exc
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    logger.debug("Moved staged tree into %s", target)


def _move_entries(source: Path, target: Path) -> None:
    """Move every entry of source into target, undoing the moves on failure."""
    moved: list[Path] = []
    try:
        for entry in sorted(source.iterdir()):
            destination = target / entry.name
            os.replace(entry, destination)
            moved.append(destination)
    except OSError:
        for destination in moved:
            if destination.is_dir():
                shutil.rmtree(destination, ignore_errors=True)
            else:
                destination.unlink(missing_ok=True)
        raise
