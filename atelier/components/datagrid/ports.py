"""
Datagrid component - Port interfaces.

The grid depends on its environment only through these two capabilities,
so tests can drive resizes and scroll visibility directly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class ViewportPort(Protocol):
    """Reports the viewport width and notifies on resize."""

    def current_width(self) -> float:
        """Current viewport width in pixels."""
        ...

    def subscribe(self, listener: Callable[[float], None]) -> Callable[[], None]:
        """Register a resize listener. Returns a function that removes it."""
        ...


class SentinelPort(Protocol):
    """Visibility of the element at the end of a card list."""

    def observe(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """
        Start observing the sentinel.

        The callback receives the current visibility once on observe, then
        again on every visibility transition. Returns a disconnect function.
        """
        ...
