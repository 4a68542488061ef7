"""
Helper utilities for the Docjump widget.

Provides:
- Settings loading (TOML merged over defaults)
- Opening a documentation page in the browser
"""

import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

DEFAULT_SETTINGS: Dict[str, Any] = {
    "search": {
        "endpoint": "https://clojars.org/search",
        "debounce_ms": 300,
        "blur_grace_ms": 200,
        "request_timeout": 5.0,
        "max_results": 30,
    },
    "navigation": {
        "base_url": "https://cljdoc.org",
    },
    "panel": {
        "width": 600,
        "height": 480,
        "placeholder": "Jump to docs...",
    },
}

SETTINGS_PATH = Path(__file__).parent.parent / "data" / "settings.toml"


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load widget settings from a TOML file.

    Args:
        settings_path: File to read (defaults to docjump/data/settings.toml)

    Returns:
        Dictionary containing settings with defaults applied
    """
    settings_path = settings_path or SETTINGS_PATH

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence); base is not mutated
    """
    result = {}

    for key, value in base.items():
        result[key] = _deep_merge(value, {}) if isinstance(value, dict) else value

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def docs_url(base_url: str, path: str) -> str:
    """Join the docs site root and a /d/... destination path."""
    return base_url.rstrip("/") + path


def open_uri(url: str) -> bool:
    """
    Open a URL in the default browser via xdg-open.

    Returns:
        True if xdg-open was started
    """
    try:
        subprocess.Popen(
            ["xdg-open", url],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        logger.warning("xdg-open not found, cannot open URL")
        return False
    return True
