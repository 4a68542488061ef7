"""
Search package - Incremental query pipeline and selection state.

Keystrokes flow through sanitize -> debounce -> fetch, and completions plus
key/pointer events drive the SelectionState owned by InteractionController.
"""

from .controller import InteractionController
from .debounce import Debouncer, schedule
from .fetcher import FetchError, ResultFetcher
from .models import Result, ResultSet
from .sanitize import sanitize
from .selection import Key, Phase, SelectionState

__all__ = [
    "InteractionController",
    "Debouncer",
    "schedule",
    "FetchError",
    "ResultFetcher",
    "Result",
    "ResultSet",
    "sanitize",
    "Key",
    "Phase",
    "SelectionState",
]
