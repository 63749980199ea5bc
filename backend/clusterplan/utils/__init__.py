"""Utility modules for the application.

This package contains shared utility functions and classes.
"""

from clusterplan.utils.text import slugify, title_case_words, truncate_text

__all__ = [
    "slugify",
    "title_case_words",
    "truncate_text",
]
