# Docjump Utilities Package
"""
Shared utility functions and helpers for the Docjump widget.
"""

from .helpers import docs_url, load_settings, open_uri

__all__ = ["docs_url", "load_settings", "open_uri"]
