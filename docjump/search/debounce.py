"""
Debounce Scheduler - Collapse a burst of calls into one after a quiet period.

Each trigger() cancels the pending invocation (if any) and arms a new one, so
only the arguments of the last call in a burst are delivered. Intermediate
calls are dropped, not queued.

The same class drives both the keystroke debounce and the blur grace period.
"""

from typing import Any, Callable, Optional

from .timers import Timer


class Debouncer:
    """
    Holds at most one pending timer for a wrapped function.

    Discarding a Debouncer does not disarm its timer; owners call cancel().
    """

    def __init__(self, delay_ms: int, fn: Callable[..., Any], timer: Timer):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.delay_ms = delay_ms
        self.fn = fn
        self._timer = timer
        self._handle: Optional[Any] = None

    @property
    def pending(self) -> bool:
        """True while an invocation is armed and has not fired yet."""
        return self._handle is not None

    def trigger(self, *args, **kwargs) -> None:
        """Cancel any pending invocation and arm fn(*args, **kwargs)."""
        self.cancel()
        self._handle = self._timer.call_later(
            self.delay_ms, lambda: self._fire(args, kwargs)
        )

    __call__ = trigger

    def cancel(self) -> None:
        """Disarm the pending invocation, if any."""
        if self._handle is not None:
            self._timer.cancel(self._handle)
            self._handle = None

    def _fire(self, args: tuple, kwargs: dict) -> None:
        # Cleared first so fn may re-trigger this debouncer
        self._handle = None
        self.fn(*args, **kwargs)


def schedule(delay_ms: int, fn: Callable[..., Any], timer: Timer) -> Debouncer:
    """
    Wrap fn in a Debouncer.

    Args:
        delay_ms: Quiet period in milliseconds (0 = next main loop turn)
        fn: Function to invoke with the last trigger's arguments
        timer: Timer source (GLibTimer in the panel)

    Returns:
        Debouncer; calling it is the same as calling trigger()

    Example:
        load = schedule(300, fetcher.fetch, GLibTimer())
        load("ring", on_results)
    """
    return Debouncer(delay_ms, fn, timer)
