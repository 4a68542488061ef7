"""
Tests for the InteractionController wiring.

Uses the manual-clock timer and a scripted fetcher so debounce firings and
out-of-order replies are fully deterministic.
"""

from unittest.mock import MagicMock

import pytest
from conftest import make_result

from docjump.search.controller import InteractionController
from docjump.search.selection import Key, Phase


@pytest.fixture
def navigate():
    return MagicMock()


@pytest.fixture
def controller(fetcher, timer, navigate):
    return InteractionController(
        fetcher=fetcher, timer=timer, navigate=navigate,
        debounce_ms=300, blur_grace_ms=200,
    )


def _type(controller, timer, text, gap_ms=50):
    """Simulate typing text one character at a time."""
    for i in range(1, len(text) + 1):
        controller.on_input(text[:i])
        timer.advance(gap_ms)


class TestQueryPipeline:

    def test_typing_dispatches_once_after_quiet_period(self, controller, fetcher, timer):
        _type(controller, timer, "ring")
        assert fetcher.queries == []
        timer.advance(300)
        assert fetcher.queries == ["ring"]

    def test_query_is_sanitized(self, controller, fetcher, timer):
        controller.on_input('[ring "1.2.0"]')
        timer.advance(300)
        assert fetcher.queries == ["ring 1.2.0"]

    def test_ring_scenario(self, controller, fetcher, timer, navigate):
        _type(controller, timer, "ring")
        timer.advance(300)
        fetcher.complete(0, [make_result("ring", version="1.2.0")])

        assert controller.state.phase is Phase.FOCUSED_WITH_RESULTS
        assert controller.state.selected_index == 0

        controller.on_key(Key.ARROW_DOWN)
        assert controller.state.selected_index == 0

        controller.on_key(Key.ENTER)
        navigate.assert_called_once_with("/d/ring/ring/1.2.0")

    def test_stale_reply_arriving_last_is_dropped(self, controller, fetcher, timer):
        controller.on_input("rin")
        timer.advance(300)
        controller.on_input("ring")
        timer.advance(300)

        q2_results = [make_result("ring", version="1.2.0")]
        fetcher.complete(1, q2_results)
        fetcher.complete(0, [make_result("rin-old")])

        assert controller.state.results == tuple(q2_results)

    def test_older_reply_arriving_first_is_dropped(self, controller, fetcher, timer):
        controller.on_input("rin")
        timer.advance(300)
        controller.on_input("ring")
        timer.advance(300)

        fetcher.complete(0, [make_result("rin-old")])
        assert controller.state.results == ()

        q2_results = [make_result("ring")]
        fetcher.complete(1, q2_results)
        assert controller.state.results == tuple(q2_results)

    def test_failed_fetch_keeps_previous_results(self, controller, fetcher, timer, three_results):
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)

        # Second query never completes (fetch failure)
        controller.on_input("ringx")
        timer.advance(300)
        assert controller.state.results == three_results

    def test_blank_query_clears_without_request(self, controller, fetcher, timer, three_results):
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)

        controller.on_input('[""]')
        timer.advance(300)
        assert fetcher.queries == ["ring"]
        assert controller.state.results == ()
        assert controller.state.phase is Phase.FOCUSED_EMPTY

    def test_blank_query_orphans_in_flight_reply(self, controller, fetcher, timer):
        controller.on_input("ring")
        timer.advance(300)
        controller.on_input("")
        timer.advance(300)
        fetcher.complete(0, [make_result("ring")])
        assert controller.state.results == ()


class TestFocusAndBlur:

    def test_focus_shows_existing_results(self, controller, fetcher, timer, three_results):
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)
        controller.on_key(Key.ESCAPE)
        assert controller.state.visible is False

        controller.on_focus()
        assert controller.state.visible is True

    def test_blur_unfocuses_after_grace_period(self, controller, timer):
        controller.on_focus()
        controller.on_blur()
        timer.advance(199)
        assert controller.state.focused is True
        timer.advance(1)
        assert controller.state.focused is False

    def test_refocus_within_grace_cancels_unfocus(self, controller, timer):
        controller.on_focus()
        controller.on_blur()
        timer.advance(100)
        controller.on_focus()
        timer.advance(1000)
        assert controller.state.focused is True

    def test_row_click_during_blur_is_not_preempted(self, controller, fetcher, timer, navigate, three_results):
        controller.on_focus()
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)

        # Clicking a row blurs the input first
        controller.on_blur()
        timer.advance(50)
        assert controller.state.visible is True

        controller.on_row_clicked(2)
        navigate.assert_called_once_with(three_results[2].uri)
        timer.advance(1000)
        assert controller.state.focused is True

    def test_escape_unfocuses_immediately(self, controller):
        controller.on_focus()
        assert controller.on_key(Key.ESCAPE) is True
        assert controller.state.focused is False


class TestKeyboardAndPointer:

    @pytest.fixture
    def loaded(self, controller, fetcher, timer, three_results):
        controller.on_focus()
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)
        return controller

    def test_arrow_keys_are_consumed(self, loaded):
        assert loaded.on_key(Key.ARROW_DOWN) is True
        assert loaded.on_key(Key.ARROW_UP) is True

    def test_other_keys_not_consumed(self, loaded):
        assert loaded.on_key(65) is False

    def test_arrow_down_then_enter(self, loaded, navigate, three_results):
        loaded.on_key(Key.ARROW_DOWN)
        loaded.on_key(Key.ENTER)
        navigate.assert_called_once_with(three_results[1].uri)

    def test_pointer_then_keyboard(self, loaded):
        loaded.on_key(Key.ARROW_DOWN)
        loaded.on_pointer_over(2)
        assert loaded.state.selected_index == 2
        loaded.on_key(Key.ARROW_UP)
        assert loaded.state.selected_index == 1

    def test_new_results_reset_selection(self, loaded, fetcher, timer):
        loaded.on_key(Key.ARROW_DOWN)
        loaded.on_input("ring-")
        timer.advance(300)
        fetcher.complete(1, [make_result("a"), make_result("b")])
        assert loaded.state.selected_index == 0

    def test_enter_with_no_results_is_noop(self, controller, navigate):
        controller.on_focus()
        assert controller.on_key(Key.ENTER) is True
        assert controller.activate() is None
        navigate.assert_not_called()


class TestListenersAndClose:

    def test_listener_receives_snapshots(self, controller, fetcher, timer, three_results):
        snapshots = []
        controller.subscribe(snapshots.append)
        controller.on_focus()
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)

        assert snapshots[0].focused is True
        assert snapshots[-1].results == three_results
        assert snapshots[-1] is controller.state

    def test_no_notification_when_state_unchanged(self, controller):
        snapshots = []
        controller.subscribe(snapshots.append)
        controller.on_key(Key.ARROW_DOWN)
        assert snapshots == []

    def test_close_cancels_timers_and_orphans_replies(self, controller, fetcher, timer):
        controller.on_input("ring")
        timer.advance(300)
        controller.on_input("ringo")
        controller.on_blur()
        controller.close()

        assert timer.pending_count == 0
        fetcher.complete(0, [make_result("ring")])
        assert controller.state.results == ()
        assert fetcher.queries == ["ring"]

    def test_dispatch_alone_does_not_notify(self, controller, fetcher, timer):
        snapshots = []
        controller.subscribe(snapshots.append)
        controller.on_input("ring")
        timer.advance(300)

        assert fetcher.queries == ["ring"]
        assert snapshots == []
        assert controller.state.dispatch_seq == 1

    def test_close_does_not_notify(self, controller):
        snapshots = []
        controller.subscribe(snapshots.append)
        controller.close()
        assert snapshots == []

    def test_close_unfocuses_and_notifies(self, controller, fetcher, timer, three_results):
        controller.on_focus()
        controller.on_input("ring")
        timer.advance(300)
        fetcher.complete(0, three_results)
        controller.on_blur()

        snapshots = []
        controller.subscribe(snapshots.append)
        controller.close()

        assert controller.state.focused is False
        assert controller.state.visible is False
        assert snapshots == [controller.state]
        assert timer.pending_count == 0
