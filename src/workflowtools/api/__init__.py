"""
Clients for the external services articles are handed to.
"""

from .overleaf import RemoteProject, upload_to_overleaf

__all__ = ["RemoteProject", "upload_to_overleaf"]
