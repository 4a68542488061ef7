# Docjump Package
"""
Search-as-you-type "jump to docs" widget for Ignis/Wayland.

Layers:
  - search: Interaction core (debounce, fetch, selection state)
  - panels: Ignis rendering of the input and result rows
  - utils:  Settings, GLib main loop glue, URL opening
"""

__version__ = "0.1.0.dev0"
