"""
Selection State Machine - Focus, current results and highlighted row.

States:
  UNFOCUSED             result list hidden (results kept in memory)
  FOCUSED_EMPTY         focused, zero results
  FOCUSED_WITH_RESULTS  focused, >= 1 result, one index selected

Every transition is a pure function SelectionState -> SelectionState so it
can be tested without a main loop. InteractionController swaps its state
reference in one assignment per event.

Stale responses: each dispatched query bumps `dispatch_seq`. A completion
is applied only if it carries the current sequence number, so a slow reply
to an older query can never overwrite a newer one.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional

from loguru import logger

from .models import Result, ResultSet


class Key(IntEnum):
    """Key codes consumed by the widget."""
    ENTER = 13
    ESCAPE = 27
    ARROW_UP = 38
    ARROW_DOWN = 40


class Phase(Enum):
    UNFOCUSED = "unfocused"
    FOCUSED_EMPTY = "focused_empty"
    FOCUSED_WITH_RESULTS = "focused_with_results"


@dataclass(frozen=True)
class SelectionState:
    """Immutable snapshot handed to the rendering layer."""
    results: ResultSet = ()
    selected_index: int = 0
    focused: bool = False
    dispatch_seq: int = 0

    @property
    def phase(self) -> Phase:
        if not self.focused:
            return Phase.UNFOCUSED
        if not self.results:
            return Phase.FOCUSED_EMPTY
        return Phase.FOCUSED_WITH_RESULTS

    @property
    def visible(self) -> bool:
        """True when the result list should be drawn."""
        return self.phase is Phase.FOCUSED_WITH_RESULTS

    @property
    def selected(self) -> Optional[Result]:
        if 0 <= self.selected_index < len(self.results):
            return self.results[self.selected_index]
        return None


def focus(state: SelectionState) -> SelectionState:
    if state.focused:
        return state
    return replace(state, focused=True)


def unfocus(state: SelectionState) -> SelectionState:
    if not state.focused:
        return state
    return replace(state, focused=False)


# Escape behaves exactly like losing focus
escape = unfocus


def query_dispatched(state: SelectionState) -> SelectionState:
    """Record a new outgoing query; older in-flight replies become stale."""
    return replace(state, dispatch_seq=state.dispatch_seq + 1)


def results_arrived(state: SelectionState, results: ResultSet, seq: int) -> SelectionState:
    """
    Apply a completed fetch.

    Args:
        state: Current state
        results: ResultSet from the fetch
        seq: dispatch_seq the query was sent with

    Returns:
        New state with the results selected at row 0 and focus forced on,
        or `state` unchanged when the reply is stale.
    """
    if seq != state.dispatch_seq:
        logger.debug(f"Dropping stale results (seq {seq}, current {state.dispatch_seq})")
        return state
    return replace(state, results=tuple(results), selected_index=0, focused=True)


def arrow_down(state: SelectionState) -> SelectionState:
    if not state.focused or not state.results:
        return state
    index = min(state.selected_index + 1, len(state.results) - 1)
    if index == state.selected_index:
        return state
    return replace(state, selected_index=index)


def arrow_up(state: SelectionState) -> SelectionState:
    if not state.focused or not state.results:
        return state
    index = max(state.selected_index - 1, 0)
    if index == state.selected_index:
        return state
    return replace(state, selected_index=index)


def pointer_over(state: SelectionState, index: int) -> SelectionState:
    """Hovered row always wins over the keyboard position."""
    if not 0 <= index < len(state.results):
        # Row from a result set that has since been replaced
        return state
    if index == state.selected_index:
        return state
    return replace(state, selected_index=index)


def activate(state: SelectionState) -> Optional[Result]:
    """Result to navigate to on Enter, or None when nothing is selectable."""
    return state.selected
