"""
Timer strategy used by the debouncers.

The interaction core never reads a clock itself. Production code plugs in
the GLib main loop (see utils.mainloop.GLibTimer); tests plug in a manual
clock.
"""

from typing import Any, Callable, Protocol


class Timer(Protocol):
    """One-shot timer source on the single event thread."""

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        """Arm `fn` to run once after `delay_ms`; return a cancel handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Disarm a handle returned by call_later. Fired handles are ignored."""
        ...
