"""
Interaction Controller - Wires input events into the search pipeline.

  input-change -> sanitize -> debounce -> fetch -> results_arrived
  key / pointer / focus events -> selection transitions (no debounce)

The controller exclusively owns the SelectionState and both timers:
  - the query debouncer (quiet period before a request is sent)
  - the blur grace timer (delays unfocus so a click on a result row,
    which blurs the input first, still lands on the row)

All handlers run on the single event thread. Each one computes the next
state from the current one and swaps it in with a single assignment before
listeners are notified.
"""

from typing import Callable, Optional

from loguru import logger

from . import selection
from .debounce import Debouncer
from .fetcher import ResultFetcher
from .models import Result, ResultSet
from .sanitize import sanitize
from .selection import Key, SelectionState
from .timers import Timer

DEBOUNCE_MS = 300
BLUR_GRACE_MS = 200


class InteractionController:
    """
    Owns the widget state and routes rendering-layer events into it.

    Args:
        fetcher: Anything with fetch(query, on_results)
        timer: Timer source shared by both debouncers
        navigate: Called with the destination path on activation
        debounce_ms: Keystroke quiet period before a query is sent
        blur_grace_ms: Delay between losing focus and hiding the list
    """

    def __init__(
        self,
        fetcher: ResultFetcher,
        timer: Timer,
        navigate: Callable[[str], None],
        debounce_ms: int = DEBOUNCE_MS,
        blur_grace_ms: int = BLUR_GRACE_MS,
    ):
        self.fetcher = fetcher
        self.navigate = navigate
        self.state = SelectionState()
        self._listeners: list[Callable[[SelectionState], None]] = []

        self._query_debouncer = Debouncer(debounce_ms, self._dispatch, timer)
        self._blur_timer = Debouncer(blur_grace_ms, self._commit_unfocus, timer)

    def subscribe(self, listener: Callable[[SelectionState], None]) -> None:
        """Register a listener called with every new state snapshot."""
        self._listeners.append(listener)

    def _apply(self, new_state: SelectionState) -> None:
        if new_state is self.state:
            return
        self.state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # --- Query pipeline ---

    def on_input(self, raw: str) -> None:
        """Handle input-change: debounce the sanitized text."""
        self._query_debouncer.trigger(sanitize(raw))

    def _dispatch(self, query: str) -> None:
        """Debounce fired: tag the query and start the fetch."""
        # Sequence bumps are invisible to the renderer; no notification
        self.state = selection.query_dispatched(self.state)
        seq = self.state.dispatch_seq

        if not query.strip():
            # Nothing to search for; close the list and orphan older replies
            self._apply(selection.results_arrived(self.state, (), seq))
            return

        logger.debug(f"Dispatching query '{query}' (seq {seq})")
        self.fetcher.fetch(query, lambda results: self._on_results(results, seq))

    def _on_results(self, results: ResultSet, seq: int) -> None:
        self._apply(selection.results_arrived(self.state, results, seq))

    # --- Focus ---

    def on_focus(self) -> None:
        self._blur_timer.cancel()
        self._apply(selection.focus(self.state))

    def on_blur(self) -> None:
        """Start the grace period; on_focus() before it elapses cancels it."""
        self._blur_timer.trigger()

    def _commit_unfocus(self) -> None:
        self._apply(selection.unfocus(self.state))

    # --- Keyboard and pointer ---

    def on_key(self, key: int) -> bool:
        """
        Handle a keydown.

        Returns:
            True if the key was consumed (caller suppresses default handling)
        """
        if key == Key.ENTER:
            self.activate()
            return True
        if key == Key.ESCAPE:
            self._blur_timer.cancel()
            self._apply(selection.escape(self.state))
            return True
        if key == Key.ARROW_UP:
            self._apply(selection.arrow_up(self.state))
            return True
        if key == Key.ARROW_DOWN:
            self._apply(selection.arrow_down(self.state))
            return True
        return False

    def on_pointer_over(self, index: int) -> None:
        self._apply(selection.pointer_over(self.state, index))

    def on_row_clicked(self, index: int) -> Optional[Result]:
        """A click on a row selects it and navigates straight away."""
        self._blur_timer.cancel()
        self.on_pointer_over(index)
        return self.activate()

    def activate(self) -> Optional[Result]:
        """Navigate to the selected result; silently does nothing without one."""
        result = selection.activate(self.state)
        if result is None:
            logger.debug("Activate with no selectable result, ignoring")
            return None

        logger.debug(f"Navigating to {result.uri}")
        self.navigate(result.uri)
        return result

    # --- Lifecycle ---

    def close(self) -> None:
        """Disarm both timers, orphan any in-flight replies and unfocus."""
        self._query_debouncer.cancel()
        self._blur_timer.cancel()
        self.state = selection.query_dispatched(self.state)
        self._apply(selection.unfocus(self.state))
