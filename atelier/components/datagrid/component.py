"""
Datagrid component - Stateful grid shells.

DataGrid and ResponsiveDataGrid hold only what the page does not: the
uncommitted search text, the current viewport class, and the sentinel
observer. Everything else arrives through GridProps on every update.

Shell Layer - handles environment events and error conversion.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ._impl import DEFAULT_BREAKPOINT_PX, build_grid_view, is_mobile_width
from .models import (
    GridAction,
    GridConfigError,
    GridProps,
    GridValidationError,
    GridView,
    LayoutMode,
    PageResult,
    PaginationInfo,
)
from .ports import SentinelPort, ViewportPort

logger = logging.getLogger(__name__)

T = TypeVar("T")


# --- Desktop Grid ---


class DataGrid(Generic[T]):
    """Table grid with search box and pagination control."""

    def __init__(self, props: GridProps[T]) -> None:
        self._props = props
        self._seen_search_term = props.search_term
        self._search_text = props.search_term

    @property
    def props(self) -> GridProps[T]:
        return self._props

    @property
    def search_text(self) -> str:
        return self._search_text

    def update(self, props: GridProps[T]) -> None:
        """Receive new props from the owning page."""
        if props.search_term != self._seen_search_term:
            self._seen_search_term = props.search_term
            self._search_text = props.search_term
        self._props = props

    def render(self) -> GridView[T]:
        return build_grid_view(self._props, search_text=self._search_text, layout=LayoutMode.TABLE)

    def activate(self, target: Any) -> bool:
        """
        Activate a rendered element (or a bare GridAction).

        Elements without an action, such as disabled page buttons or the
        ellipsis, do nothing.
        """
        action = target if isinstance(target, GridAction) else getattr(target, "action", None)
        if action is None:
            return False
        return self._props.callbacks.dispatch(action)

    def change_search(self, term: str) -> bool:
        self._search_text = term
        return self._props.callbacks.dispatch(GridAction("search", term))

    def select_page_size(self, size: int) -> bool:
        return self._props.callbacks.dispatch(GridAction("page_size", size))


# --- Infinite Scroll ---


class InfiniteScrollTrigger:
    """
    Calls on_load_more when the sentinel becomes visible.

    The observer is disconnected whenever the fetch flag or has_next_page
    changes, and only recreated while no fetch is in flight.
    """

    def __init__(self, sentinel: SentinelPort, on_load_more: Callable[[], None]) -> None:
        self._sentinel = sentinel
        self._on_load_more = on_load_more
        self._disconnect: Callable[[], None] | None = None
        self._generation = 0
        self._has_next_page = False
        self._is_fetching = False
        self._active = False

    @property
    def connected(self) -> bool:
        return self._disconnect is not None

    def sync(self, *, has_next_page: bool, is_fetching: bool) -> None:
        if (
            self._active
            and has_next_page == self._has_next_page
            and is_fetching == self._is_fetching
        ):
            return

        self.close()
        self._active = True
        self._has_next_page = has_next_page
        self._is_fetching = is_fetching
        if is_fetching:
            return

        generation = self._generation
        disconnect = self._sentinel.observe(
            lambda visible: self._handle_intersection(generation, visible)
        )
        if generation != self._generation:
            # Superseded while the initial visibility was delivered
            disconnect()
            return
        self._disconnect = disconnect

    def close(self) -> None:
        self._generation += 1
        self._active = False
        if self._disconnect is not None:
            self._disconnect()
            self._disconnect = None

    def _handle_intersection(self, generation: int, visible: bool) -> None:
        if generation != self._generation:
            return
        if visible and self._has_next_page and not self._is_fetching:
            logger.debug("Sentinel visible, loading more")
            self._on_load_more()


# --- Responsive Grid ---


class ResponsiveDataGrid(DataGrid[T]):
    """
    Grid that switches to cards below the viewport breakpoint.

    In card mode with infinite scroll enabled, a sentinel replaces the
    pagination control.
    """

    def __init__(
        self,
        props: GridProps[T],
        viewport: ViewportPort,
        sentinel: SentinelPort | None = None,
        breakpoint: int = DEFAULT_BREAKPOINT_PX,
        on_layout_change: Callable[[LayoutMode], None] | None = None,
    ) -> None:
        super().__init__(props)
        self._viewport = viewport
        self._breakpoint = breakpoint
        self._on_layout_change = on_layout_change
        self._is_mobile = False
        self._unsubscribe: Callable[[], None] | None = None
        self._trigger = (
            InfiniteScrollTrigger(sentinel, self._load_more) if sentinel is not None else None
        )

    @property
    def is_mobile(self) -> bool:
        return self._is_mobile

    @property
    def layout(self) -> LayoutMode:
        if self._is_mobile or self._props.card_layout:
            return LayoutMode.CARDS
        return LayoutMode.TABLE

    def mount(self) -> None:
        if self._unsubscribe is not None:
            return
        self._is_mobile = is_mobile_width(self._viewport.current_width(), self._breakpoint)
        self._unsubscribe = self._viewport.subscribe(self._handle_resize)
        self._sync_trigger()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._trigger is not None:
            self._trigger.close()

    def update(self, props: GridProps[T]) -> None:
        super().update(props)
        self._sync_trigger()

    def render(self) -> GridView[T]:
        return build_grid_view(self._props, search_text=self._search_text, layout=self.layout)

    def _handle_resize(self, width: float) -> None:
        before = self.layout
        self._is_mobile = is_mobile_width(width, self._breakpoint)
        if self.layout != before:
            logger.debug("Grid layout changed to %s at width %s", self.layout.value, width)
            self._sync_trigger()
            if self._on_layout_change is not None:
                self._on_layout_change(self.layout)

    def _sentinel_wanted(self) -> bool:
        props = self._props
        return (
            self.layout == LayoutMode.CARDS
            and props.enable_infinite_scroll
            and not props.error
            and not props.loading
            and len(props.records) > 0
        )

    def _sync_trigger(self) -> None:
        if self._trigger is None:
            return
        if not self._sentinel_wanted():
            self._trigger.close()
            return
        self._trigger.sync(
            has_next_page=self._props.has_next_page,
            is_fetching=self._props.is_fetching_next_page,
        )

    def _load_more(self) -> None:
        self._props.callbacks.dispatch(GridAction("load_more"))


# --- Infinite Feed ---


class InfiniteFeed(Generic[T]):
    """
    Accumulates consecutive pages for an infinite-scroll grid.

    `on_change` is called when a fetch starts and again when it ends, so a
    caller can show the loading state while the page is in flight.
    """

    def __init__(
        self,
        fetch_page: Callable[[int], PageResult[T]],
        initial_page: int = 1,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._initial_page = initial_page
        self._on_change = on_change
        self._pages: list[PageResult[T]] = []
        self._fetching = False
        self.error: str | None = None

    @property
    def records(self) -> list[T]:
        return [record for page in self._pages for record in page.records]

    @property
    def pagination(self) -> PaginationInfo | None:
        return self._pages[-1].pagination if self._pages else None

    @property
    def has_next_page(self) -> bool:
        pagination = self.pagination
        return pagination is not None and pagination.has_next_page

    @property
    def is_fetching_next_page(self) -> bool:
        return self._fetching and bool(self._pages)

    @property
    def is_loading(self) -> bool:
        return self._fetching and not self._pages

    def load(self) -> None:
        """Fetch the first page if nothing is loaded yet."""
        if not self._pages and not self._fetching:
            self._fetch(self._initial_page)

    def fetch_next_page(self) -> None:
        if self._fetching or not self.has_next_page:
            return
        pagination = self.pagination
        if pagination is None:
            return
        self._fetch(pagination.page + 1)

    def reset(self) -> None:
        self._pages = []
        self.error = None
        self.load()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _fetch(self, page: int) -> None:
        self._fetching = True
        self._notify()
        try:
            result = self._fetch_page(page)
        except Exception as e:
            logger.warning("Failed to fetch page %s: %s", page, e)
            self.error = str(e) or "Failed to load data"
        else:
            self.error = None
            self._pages.append(result)
        finally:
            self._fetching = False
        self._notify()


# --- Shell Layer Functions ---


@dataclass
class GridRenderOutput(Generic[T]):
    """Output from a render."""

    view: GridView[T] | None
    errors: list[GridValidationError]
    success: bool


def run_render(grid: DataGrid[T]) -> GridRenderOutput[T]:
    """Render a grid, converting configuration errors to output errors."""
    try:
        view = grid.render()
    except GridConfigError as e:
        return GridRenderOutput(view=None, errors=list(e.errors), success=False)
    return GridRenderOutput(view=view, errors=[], success=True)
