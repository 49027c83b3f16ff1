"""
Shared utility helpers for filesystem access, text and external launchers.
"""

from .filesystem import ensure_directory, is_empty_directory, staged_directory, write_bytes_file, write_text_file
from .http import format_request_exception
from .launch import open_target
from .text import excerpt, is_valid_package_name, one_line, r_string

__all__ = [
    "ensure_directory",
    "is_empty_directory",
    "staged_directory",
    "write_bytes_file",
    "write_text_file",
    "format_request_exception",
    "open_target",
    "excerpt",
    "is_valid_package_name",
    "one_line",
    "r_string",
]
