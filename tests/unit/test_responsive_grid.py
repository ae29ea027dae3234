"""
ResponsiveDataGrid tests: viewport switching, card layout and the
infinite-scroll sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from atelier.adapters.sentinel import ManualSentinel
from atelier.adapters.viewport import FixedViewport
from atelier.components.datagrid import (
    ACTIONS_KEY,
    Column,
    DisplayState,
    GridCallbacks,
    GridProps,
    LayoutMode,
    PaginationInfo,
    ResponsiveDataGrid,
)


@dataclass(frozen=True)
class Item:
    id: int
    name: str


ITEMS = [Item(i, f"Item {i}") for i in range(1, 6)]
COLUMNS: list[Column[Item]] = [
    Column(ACTIONS_KEY, "Actions", render=lambda item, i: f"edit-{item.id}-{i}"),
    Column("name", "Name", sortable=True),
]


class Page:
    """Stands in for the page that owns the grid."""

    def __init__(self) -> None:
        self.load_more_calls = 0
        self.layouts: list[LayoutMode] = []

    def props(self, **overrides: Any) -> GridProps[Item]:
        values: dict[str, Any] = {
            "records": ITEMS,
            "columns": COLUMNS,
            "pagination": PaginationInfo.from_counts(1, 5, 20),
            "callbacks": GridCallbacks(
                on_page_change=lambda _: None,
                on_load_more=self.load_more,
            ),
            "enable_infinite_scroll": True,
            "has_next_page": True,
        }
        values.update(overrides)
        return GridProps(**values)

    def load_more(self) -> None:
        self.load_more_calls += 1


@pytest.fixture
def owner() -> Page:
    return Page()


def make_grid(
    owner: Page, width: float, sentinel: ManualSentinel | None = None, **overrides: Any
) -> tuple[ResponsiveDataGrid[Item], FixedViewport]:
    viewport = FixedViewport(width)
    grid = ResponsiveDataGrid(
        owner.props(**overrides),
        viewport,
        sentinel,
        on_layout_change=owner.layouts.append,
    )
    grid.mount()
    return grid, viewport


class TestViewport:
    @pytest.mark.parametrize(
        ("width", "layout"),
        [(320, LayoutMode.CARDS), (767, LayoutMode.CARDS), (768, LayoutMode.TABLE), (1280, LayoutMode.TABLE)],
    )
    def test_breakpoint(self, owner: Page, width: float, layout: LayoutMode) -> None:
        grid, _ = make_grid(owner, width)

        assert grid.layout == layout
        assert grid.render().layout == layout

    def test_resize_switches_layout_and_notifies(self, owner: Page) -> None:
        grid, viewport = make_grid(owner, 1024)

        viewport.resize(500)
        assert grid.layout == LayoutMode.CARDS
        viewport.resize(900)
        assert grid.layout == LayoutMode.TABLE

        assert owner.layouts == [LayoutMode.CARDS, LayoutMode.TABLE]

    def test_resize_within_same_class_is_silent(self, owner: Page) -> None:
        grid, viewport = make_grid(owner, 1024)

        viewport.resize(1500)

        assert owner.layouts == []

    def test_card_layout_forced(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 1280, card_layout=True)

        assert grid.layout == LayoutMode.CARDS

    def test_unmount_unsubscribes(self, owner: Page) -> None:
        grid, viewport = make_grid(owner, 1024)
        assert viewport.listener_count == 1

        grid.unmount()
        viewport.resize(400)

        assert viewport.listener_count == 0
        assert owner.layouts == []

    def test_second_mount_keeps_one_listener(self, owner: Page) -> None:
        grid, viewport = make_grid(owner, 1024)

        grid.mount()
        assert viewport.listener_count == 1

        grid.unmount()
        assert viewport.listener_count == 0

    def test_custom_breakpoint(self, owner: Page) -> None:
        grid = ResponsiveDataGrid(owner.props(), FixedViewport(900), breakpoint=1000)
        grid.mount()

        assert grid.is_mobile


class TestCards:
    def test_actions_at_bottom_not_as_field(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 400)

        cards = grid.render().cards

        assert len(cards) == 5
        assert [f.key for f in cards[0].fields] == ["name"]
        assert cards[2].actions == "edit-3-2"

    def test_table_keeps_actions_column(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 1024)

        view = grid.render()

        assert [h.key for h in view.headers] == [ACTIONS_KEY, "name"]

    def test_infinite_scroll_replaces_pagination(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 400)

        view = grid.render()

        assert view.pagination is None
        assert view.sentinel is not None
        assert not view.sentinel.fetching

    def test_fetching_message(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 400, is_fetching_next_page=True)

        sentinel = grid.render().sentinel

        assert sentinel is not None
        assert sentinel.message == "Loading more..."

    def test_cards_without_infinite_scroll_paginate(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 400, enable_infinite_scroll=False)

        view = grid.render()

        assert view.sentinel is None
        assert view.pagination is not None

    def test_table_always_paginates(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 1024)

        view = grid.render()

        assert view.pagination is not None
        assert view.sentinel is None

    def test_loading_message_in_cards(self, owner: Page) -> None:
        grid, _ = make_grid(owner, 400, records=[], loading=True)

        view = grid.render()

        assert view.state == DisplayState.LOADING
        assert view.message == "Loading..."
        assert view.cards == ()


class TestInfiniteScroll:
    def test_visible_sentinel_loads_once(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        make_grid(owner, 400, sentinel)

        sentinel.set_visible(True)

        assert owner.load_more_calls == 1

    def test_already_visible_sentinel_fires_on_observe(self, owner: Page) -> None:
        sentinel = ManualSentinel(visible=True)
        make_grid(owner, 400, sentinel)

        assert owner.load_more_calls == 1

    def test_no_observer_while_fetching(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, _ = make_grid(owner, 400, sentinel)
        sentinel.set_visible(True)

        grid.update(owner.props(is_fetching_next_page=True))
        sentinel.set_visible(False)
        sentinel.set_visible(True)

        assert sentinel.observer_count == 0
        assert owner.load_more_calls == 1

    def test_fetch_completion_reobserves(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, _ = make_grid(owner, 400, sentinel)
        sentinel.set_visible(True)
        grid.update(owner.props(is_fetching_next_page=True))

        grid.update(owner.props(is_fetching_next_page=False))

        # Still visible after the new page arrived, so the next page loads
        assert owner.load_more_calls == 2

    def test_no_more_pages(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        make_grid(owner, 400, sentinel, has_next_page=False)

        sentinel.set_visible(True)

        assert owner.load_more_calls == 0

    def test_table_layout_does_not_observe(self, owner: Page) -> None:
        sentinel = ManualSentinel(visible=True)
        make_grid(owner, 1024, sentinel)

        assert sentinel.observer_count == 0
        assert owner.load_more_calls == 0

    def test_switch_to_table_disconnects(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, viewport = make_grid(owner, 400, sentinel)
        assert sentinel.observer_count == 1

        viewport.resize(1200)
        sentinel.set_visible(True)

        assert sentinel.observer_count == 0
        assert owner.load_more_calls == 0

    def test_unmount_disconnects(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, _ = make_grid(owner, 400, sentinel)

        grid.unmount()
        sentinel.set_visible(True)

        assert owner.load_more_calls == 0

    def test_error_stops_loading(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, _ = make_grid(owner, 400, sentinel)

        grid.update(owner.props(error="Failed to fetch courses"))
        sentinel.set_visible(True)

        assert owner.load_more_calls == 0

    def test_unchanged_flags_keep_observer(self, owner: Page) -> None:
        sentinel = ManualSentinel()
        grid, _ = make_grid(owner, 400, sentinel)

        grid.update(owner.props(records=ITEMS[:3]))

        assert sentinel.observer_count == 1
