# affix/__init__.py
"""
Affix file package exports for aff-scanner.

    from affix import AffParser
    from affix import report_generator, summary, utils
"""

from . import parser_aff, report_generator, summary, utils
from .parser_aff import AffParser

__all__ = [
    "AffParser",
    "parser_aff",
    "report_generator",
    "summary",
    "utils",
]
