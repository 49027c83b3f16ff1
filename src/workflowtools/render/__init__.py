"""
Conversion of literate articles into typesetting formats.
"""

from .latex import ConversionResult, markdown_to_latex, resolve_pandoc

__all__ = ["ConversionResult", "markdown_to_latex", "resolve_pandoc"]
