"""
GLib main loop glue for the interaction core.

GLib callbacks return False so timeouts and idles run once.
"""

from gi.repository import GLib


class GLibTimer:
    """Timer backed by GLib.timeout_add on the default main context."""

    def call_later(self, delay_ms: int, fn) -> int:
        return GLib.timeout_add(delay_ms, _fire_once, fn)

    def cancel(self, handle: int) -> None:
        # Source may already be gone if it fired during this main loop turn
        source = GLib.main_context_default().find_source_by_id(handle)
        if source is not None and not source.is_destroyed():
            GLib.source_remove(handle)


def run_on_main(fn, *args) -> None:
    """Schedule fn(*args) on the main loop from any thread."""
    GLib.idle_add(_fire_once, fn, *args)


def _fire_once(fn, *args) -> bool:
    fn(*args)
    return False
