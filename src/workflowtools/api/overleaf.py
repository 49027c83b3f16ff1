"""
Upload article sources to Overleaf as a new project.
"""

from __future__ import annotations

import base64
import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import urljoin, urlparse

import requests

from ..config import Secrets, ToolConfig, get_secrets
from ..errors import UploadAuthError, UploadError, UploadNetworkError, UploadRejectedError
from ..util import excerpt, format_request_exception, open_target

logger = logging.getLogger(__name__)

DOCS_ENDPOINT = "/docs"
SESSION_COOKIE = "overleaf_session2"
USER_AGENT = "workflowtools"
_PROJECT_PATH = re.compile(r"/project/(?P<project_id>[A-Za-z0-9]+)")


@dataclass
class RemoteProject:
    """
    A project created on the remote service.

    Attributes:
        project_id: Identifier assigned by the service.
        url: Address of the project in the web editor.
        files: Archive member names that were uploaded.
    """
    project_id: str
    url: str
    files: List[str]


def collect_upload_files(source: Path) -> List[Path]:
    """
    List the files to upload from a directory or single file.

    Hidden files and anything inside hidden directories are skipped.
    """
    if source.is_file():
        return [source]
    files: List[Path] = []
    for candidate in sorted(source.rglob("*")):
        if not candidate.is_file():
            continue
        relative = candidate.relative_to(source)
        if any(part.startswith(".") for part in relative.parts):
            logger.debug("Skipping hidden path %s", relative)
            continue
        files.append(candidate)
    return files


def build_archive(source: Path, files: List[Path]) -> tuple[bytes, List[str]]:
    """
    Pack files into an in-memory zip archive.

    Members are named relative to source (or by file name for a single file).
    """
    base = source if source.is_dir() else source.parent
    names: List[str] = []
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as bundle:
        for path in files:
            arcname = path.relative_to(base).as_posix()
            bundle.write(path, arcname)
            names.append(arcname)
    return buffer.getvalue(), names


def archive_data_uri(payload: bytes) -> str:
    """Encode a zip archive as a base64 data URI."""
    return "data:application/zip;base64," + base64.b64encode(payload).decode("ascii")


def upload_to_overleaf(
    source: Path | str,
    *,
    open_in_browser: bool = False,
    config: Optional[ToolConfig] = None,
    secrets: Optional[Secrets] = None,
) -> RemoteProject:
    """
    Send a directory (or single file) to Overleaf as a brand-new project.

    All files travel in a single request: they are zipped in memory and posted
    to the service's `/docs` endpoint as a base64 `data:` URI. Each call creates
    another project; nothing is retried.

    Args:
        source: Directory whose files are uploaded, or a single file.
        open_in_browser: Open the new project in the default browser.
        config: Settings providing the service URL and timeout.
        secrets: Credentials; the session cookie is attached when present.

    Returns:
        The RemoteProject created by the service.

    Raises:
        UploadError: If source is missing or contains no files.
        UploadNetworkError: If the service cannot be reached.
        UploadAuthError: If the service refuses the session.
        UploadRejectedError: If the service answers without creating a project.
    """
    config = config or ToolConfig()
    secrets = secrets or get_secrets()
    source_path = Path(source).expanduser().resolve()
    if not source_path.exists():
        raise UploadError(f"Nothing to upload: {source_path} does not exist")

    files = collect_upload_files(source_path)
    if not files:
        raise UploadError(f"Nothing to upload: {source_path} contains no files")

    try:
        payload, names = build_archive(source_path, files)
    except OSError as exc:
        raise UploadError(f"Unable to read files from {source_path}: {exc}") from exc
    logger.info("Uploading %d files (%d bytes zipped) from %s", len(names), len(payload), source_path)

    endpoint = config.overleaf_url + DOCS_ENDPOINT
    cookies = {SESSION_COOKIE: secrets.overleaf_session} if secrets.overleaf_session else None
    try:
        response = requests.post(
            endpoint,
            data={
                "snip_uri": archive_data_uri(payload),
                "snip_name": source_path.stem if source_path.is_file() else source_path.name,
            },
            cookies=cookies,
            headers={"User-Agent": USER_AGENT},
            allow_redirects=False,
            timeout=config.upload_timeout,
        )
    except requests.RequestException as exc:
        logger.error("Upload to %s failed: %s", endpoint, format_request_exception(exc))
        raise UploadNetworkError(f"Could not reach {endpoint}: {format_request_exception(exc)}") from exc

    project = _project_from_response(response, config.overleaf_url, names)
    logger.info("Created remote project %s at %s", project.project_id, project.url)

    if open_in_browser:
        open_target(project.url)
    return project


def _project_from_response(response: requests.Response, base_url: str, names: List[str]) -> RemoteProject:
    """Interpret the service reply, raising the matching upload error."""
    status = response.status_code
    if status in (401, 403):
        raise UploadAuthError(
            f"Overleaf refused the upload (HTTP {status}); check OVERLEAF_SESSION.",
            status_code=status,
        )

    location = response.headers.get("Location") if 300 <= status < 400 else None
    if location:
        absolute = urljoin(base_url + "/", location)
        path = urlparse(absolute).path
        match = _PROJECT_PATH.search(path)
        if match:
            return RemoteProject(project_id=match.group("project_id"), url=absolute, files=names)
        if path.rstrip("/").endswith("/login"):
            raise UploadAuthError("Overleaf redirected to the login page; sign in and set OVERLEAF_SESSION.", status_code=status)
        raise UploadRejectedError(status, f"unexpected redirect to {absolute}")

    raise UploadRejectedError(status, excerpt(response.text or response.reason or "no response body"))
