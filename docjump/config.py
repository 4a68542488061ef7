"""
Docjump - Main Ignis Configuration

This file is the entry point for Ignis. It creates the search panel window.

Usage:
  ignis init -c /path/to/docjump/config.py
  ignis toggle-window docjump-search
"""

import os

from ignis.app import IgnisApp
from loguru import logger

from docjump.panels.search import SearchPanel

config_dir = os.path.dirname(os.path.realpath(__file__))
styles_dir = os.path.join(config_dir, "styles")

app = IgnisApp.get_default()

try:
    app.apply_css(os.path.join(styles_dir, "main.css"))
except Exception as e:
    logger.warning(f"Could not load main.css: {e}")

search_panel = SearchPanel()
search_window = search_panel.create_window()

# Keep the panel reachable from the window for ignis commands
search_window.panel = search_panel

logger.info("Docjump initialized; toggle with: ignis toggle-window docjump-search")
