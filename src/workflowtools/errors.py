"""
Exception types surfaced to callers of the authoring helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class WorkflowToolsError(RuntimeError):
    """Base class for every failure reported by workflowtools."""


class DestinationExistsError(WorkflowToolsError):
    """Raised when a target path already holds author work."""

    def __init__(self, path: Path, reason: str = "already exists") -> None:
        self.path = path
        super().__init__(f"Refusing to write to {path}: {reason}")


class InvalidNameError(WorkflowToolsError):
    """Raised when a directory name cannot be used as a package name."""


class UnknownTemplateError(WorkflowToolsError):
    """Raised when a template name is not in the registry."""

    def __init__(self, name: str, known: Iterable[str]) -> None:
        self.name = name
        self.known = sorted(known)
        super().__init__(f"Unknown template '{name}'. Available templates: {', '.join(self.known)}")


class WriteError(WorkflowToolsError):
    """Raised when the filesystem refuses a write."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Unable to write {path}: {cause.strerror or cause}")


class RenderError(WorkflowToolsError):
    """Raised when the external converter fails or produces no output."""

    def __init__(self, message: str, *, stderr: Optional[str] = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class RendererNotFoundError(RenderError):
    """Raised when the converter executable cannot be located."""


class UploadError(WorkflowToolsError):
    """Raised when an upload cannot be prepared or completed."""


class UploadNetworkError(UploadError):
    """Raised when the remote service cannot be reached."""


class UploadAuthError(UploadError):
    """Raised when the remote service refuses the credentials."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UploadRejectedError(UploadError):
    """Raised when the remote service answers but does not create a project."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Upload rejected (HTTP {status_code}): {detail}")
