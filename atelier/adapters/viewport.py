"""
Viewport adapters for ResponsiveDataGrid.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import flet as ft

logger = logging.getLogger(__name__)

Listener = Callable[[float], None]


class _Listeners:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def notify(self, width: float) -> None:
        for listener in list(self._listeners):
            listener(width)

    def __len__(self) -> int:
        return len(self._listeners)


class FixedViewport:
    """A viewport whose width is set by the caller (tests, SSR width hints)."""

    def __init__(self, width: float = 1024):
        self._width = float(width)
        self._listeners = _Listeners()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def current_width(self) -> float:
        return self._width

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._listeners.add(listener)

    def resize(self, width: float) -> None:
        self._width = float(width)
        self._listeners.notify(self._width)


class FletPageViewport:
    """Tracks the width of a Flet page through its resize events."""

    def __init__(self, page: ft.Page):
        self._page = page
        self._listeners = _Listeners()
        self._width = float(page.width or 0)
        page.on_resized = self._handle_resized

    def current_width(self) -> float:
        return self._width

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._listeners.add(listener)

    def _handle_resized(self, e: Any) -> None:
        width = getattr(e, "width", None) or self._page.width or 0
        self._width = float(width)
        logger.debug("Page resized to %spx", self._width)
        self._listeners.notify(self._width)
