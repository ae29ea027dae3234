"""
Sentinel adapters for infinite scroll.
"""

from __future__ import annotations

from collections.abc import Callable

import flet as ft

Callback = Callable[[bool], None]

DEFAULT_SCROLL_THRESHOLD_PX = 100


class ManualSentinel:
    """Visibility driven by the caller. Used in tests."""

    def __init__(self, visible: bool = False):
        self._visible = visible
        self._callbacks: list[Callback] = []

    @property
    def observer_count(self) -> int:
        return len(self._callbacks)

    @property
    def visible(self) -> bool:
        return self._visible

    def observe(self, callback: Callback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def disconnect() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        callback(self._visible)
        return disconnect

    def set_visible(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        for callback in list(self._callbacks):
            if callback in self._callbacks:
                callback(visible)


class FletScrollSentinel(ManualSentinel):
    """
    Treats the end of a scrollable Flet column as the sentinel.

    Wire `handle_scroll` to the column's `on_scroll`; the sentinel counts as
    visible once the scroll position is within `threshold_px` of the end.
    """

    def __init__(self, threshold_px: float = DEFAULT_SCROLL_THRESHOLD_PX):
        super().__init__(visible=False)
        self.threshold_px = threshold_px

    def handle_scroll(self, e: ft.OnScrollEvent) -> None:
        remaining = e.max_scroll_extent - e.pixels
        self.set_visible(remaining <= self.threshold_px)
