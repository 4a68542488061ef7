# Docjump Panels Package
"""
Ignis rendering for the search widget.
"""

from .search import SearchPanel, render_result_row

__all__ = ["SearchPanel", "render_result_row"]
