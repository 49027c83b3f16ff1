"""
Workflow package scaffolding.
"""

from .package import DESCRIPTION_FILENAME, VIGNETTES_DIRNAME, ScaffoldReport, create_workflow, render_description

__all__ = ["DESCRIPTION_FILENAME", "VIGNETTES_DIRNAME", "ScaffoldReport", "create_workflow", "render_description"]
