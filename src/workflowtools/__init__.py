"""
Tooling for authoring literate workflow articles aimed at two publishing platforms.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("workflowtools")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
