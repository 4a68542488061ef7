"""
Search Panel - Input entry with a drop-down list of matching artifacts.

Features:
- Search-as-you-type against the remote search service (debounced)
- Keyboard navigation (arrow keys, Enter to open docs, Escape to close list)
- Hover highlights a row, click opens its docs
- Auto-focus the entry when the panel opens
- Clear the entry when the panel closes

All state lives in InteractionController; this module only turns GTK events
into controller calls and SelectionState snapshots into widgets.
"""

from typing import Callable, Optional

from gi.repository import Gdk, Gtk
from ignis import widgets
from loguru import logger

from docjump.search import InteractionController, Key, Result, ResultFetcher, SelectionState
from docjump.utils.helpers import docs_url, load_settings, open_uri
from docjump.utils.mainloop import GLibTimer, run_on_main

_GDK_KEYS = {
    Gdk.KEY_Return: Key.ENTER,
    Gdk.KEY_KP_Enter: Key.ENTER,
    Gdk.KEY_Escape: Key.ESCAPE,
    Gdk.KEY_Up: Key.ARROW_UP,
    Gdk.KEY_Down: Key.ARROW_DOWN,
}

RowRenderer = Callable[[Result, bool], Gtk.Widget]


def render_result_row(result: Result, is_selected: bool) -> Gtk.Widget:
    """Default row: project name, version, and a "view docs" hint."""
    css_classes = ["result-item"]
    if is_selected:
        css_classes.append("selected")

    return widgets.Box(
        css_classes=css_classes,
        spacing=8,
        child=[
            widgets.Label(
                label=result.project,
                css_classes=["result-project"],
                ellipsize="end",
                max_width_chars=40,
            ),
            widgets.Label(
                label=result.version,
                css_classes=["result-version"],
            ),
            widgets.Label(
                label="view docs",
                css_classes=["result-docs-link"],
                hexpand=True,
                halign="end",
            ),
        ],
    )


class SearchPanel:
    """
    Docs search panel.

    Args:
        settings: Settings dict (loaded from settings.toml when omitted)
        row_renderer: Builds the widget for one result row
    """

    def __init__(self, settings: Optional[dict] = None, row_renderer: RowRenderer = render_result_row):
        self.settings = settings or load_settings()
        self.row_renderer = row_renderer

        search = self.settings["search"]
        self.fetcher = ResultFetcher(
            endpoint=search["endpoint"],
            timeout=search["request_timeout"],
            max_results=search["max_results"],
            deliver=run_on_main,
        )
        self.controller = InteractionController(
            fetcher=self.fetcher,
            timer=GLibTimer(),
            navigate=self._navigate,
            debounce_ms=search["debounce_ms"],
            blur_grace_ms=search["blur_grace_ms"],
        )
        self.controller.subscribe(self._render)

        # Widgets (created in create_window)
        self.window = None
        self.search_entry = None
        self.results_box = None
        self.results_scroll = None
        self.row_widgets = []
        self._rendered_results = None

    def create_window(self):
        """
        Create the search panel window.

        Returns:
            widgets.Window positioned at top center
        """
        panel = self.settings["panel"]

        self.search_entry = widgets.Entry(
            placeholder_text=panel["placeholder"],
            css_classes=["search-entry"],
            on_change=lambda entry: self.controller.on_input(entry.text),
        )

        focus_controller = Gtk.EventControllerFocus()
        focus_controller.connect("enter", lambda c: self.controller.on_focus())
        focus_controller.connect("leave", lambda c: self.controller.on_blur())
        self.search_entry.add_controller(focus_controller)

        self.results_box = widgets.Box(
            vertical=True,
            css_classes=["search-results"],
        )
        self.results_scroll = widgets.Scroll(
            vexpand=True,
            hexpand=True,
            visible=False,
            child=self.results_box,
        )

        self.window = widgets.Window(
            namespace="docjump-search",
            anchor=["top"],
            exclusivity="normal",
            kb_mode="on_demand",
            layer="top",
            visible=False,
            default_width=panel["width"],
            default_height=panel["height"],
            child=widgets.Box(
                vertical=True,
                css_classes=["panel", "search-panel"],
                child=[self.search_entry, self.results_scroll],
            ),
        )

        # Capture phase so arrows never reach the entry's caret handling
        key_controller = Gtk.EventControllerKey()
        key_controller.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        key_controller.connect("key-pressed", self._on_key_press)
        self.window.add_controller(key_controller)

        self.window.connect("notify::visible", self._on_visibility_changed)

        return self.window

    def _on_key_press(self, controller, keyval, keycode, state) -> bool:
        key = _GDK_KEYS.get(keyval)
        if key is None:
            return False
        return self.controller.on_key(key)

    def _on_visibility_changed(self, window, param):
        """Focus the entry on open; reset everything on close."""
        if window.get_visible():
            self.search_entry.grab_focus()
        else:
            # Clearing fires on_change, so close() must come after it
            self.search_entry.set_text("")
            self.controller.close()

    def _navigate(self, path: str):
        url = docs_url(self.settings["navigation"]["base_url"], path)
        if open_uri(url) and self.window is not None:
            self.window.set_visible(False)

    # --- Rendering ---

    def _render(self, state: SelectionState):
        if self.results_box is None:
            return

        if state.results is not self._rendered_results:
            self._rebuild_rows(state)
        else:
            self._update_selection_highlight(state.selected_index)

        self.results_scroll.set_visible(state.visible)

    def _rebuild_rows(self, state: SelectionState):
        """Replace every row with ones built from the new result set."""
        child = self.results_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.results_box.remove(child)
            child = next_child

        self.row_widgets = []
        for index, result in enumerate(state.results):
            row = self.row_renderer(result, index == state.selected_index)
            self._attach_pointer_controllers(row, index)
            self.results_box.append(row)
            self.row_widgets.append(row)

        self._rendered_results = state.results
        logger.debug(f"Rendered {len(self.row_widgets)} result rows")

    def _attach_pointer_controllers(self, row, index: int):
        motion = Gtk.EventControllerMotion()
        motion.connect("enter", lambda c, x, y, i=index: self.controller.on_pointer_over(i))
        row.add_controller(motion)

        click = Gtk.GestureClick()
        click.set_button(1)  # Left click
        click.connect("pressed", lambda g, n, x, y, i=index: self.controller.on_row_clicked(i))
        row.add_controller(click)

    def _update_selection_highlight(self, selected_index: int):
        for i, row in enumerate(self.row_widgets):
            if i == selected_index:
                row.add_css_class("selected")
            else:
                row.remove_css_class("selected")
