"""
Bundled article templates and the draft helper that copies them into place.
"""

from .registry import (
    DEFAULT_TEMPLATE,
    TEMPLATES,
    ArticleTemplate,
    get_template,
    list_templates,
    read_template_bytes,
    template_path,
)
from .draft import copy_template_resources, draft_from_template

__all__ = [
    "DEFAULT_TEMPLATE",
    "TEMPLATES",
    "ArticleTemplate",
    "get_template",
    "list_templates",
    "read_template_bytes",
    "template_path",
    "copy_template_resources",
    "draft_from_template",
]
