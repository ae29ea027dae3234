"""
Flet courses screen tests, driven through a stand-in page object.
"""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import flet as ft
import pytest

from atelier.components.datagrid import LayoutMode, SentinelView
from atelier.ui.context import ServiceContext
from atelier.ui.main import CoursesAdmin


class StubPage:
    """The parts of ft.Page the courses screen touches."""

    def __init__(self, width: float) -> None:
        self.width = width
        self.on_resized: Callable[[Any], None] | None = None
        self.update_count = 0
        self.on_update: Callable[[], None] | None = None

    def update(self) -> None:
        self.update_count += 1
        if self.on_update is not None:
            self.on_update()

    def run_thread(self, handler: Callable[..., Any], *args: Any) -> None:
        handler(*args)

    def open(self, control: ft.Control) -> None:
        pass


def type_into(field: ft.TextField, text: str) -> None:
    field.value = text
    field.on_change(SimpleNamespace(control=field))


def text_fields(control: ft.Control) -> list[ft.TextField]:
    found = [control] if isinstance(control, ft.TextField) else []
    children: list[Any] = []
    for attr in ("controls", "content"):
        value = getattr(control, attr, None)
        if isinstance(value, list):
            children.extend(value)
        elif isinstance(value, ft.Control):
            children.append(value)
    for child in children:
        found.extend(text_fields(child))
    return found


@pytest.fixture
def wide_admin(memory_ctx: ServiceContext) -> CoursesAdmin:
    admin = CoursesAdmin(StubPage(1280), memory_ctx)
    admin.start()
    return admin


def test_search_field_survives_refresh(wide_admin: CoursesAdmin) -> None:
    field = wide_admin.search_field

    type_into(field, "Silk")
    wide_admin.refresh()

    assert wide_admin.container.controls[0] is field
    assert wide_admin.search_field is field
    assert field.value == "Silk"
    assert wide_admin.query.search == "Silk"
    assert len(wide_admin.feed.records) == 3
    assert all(c.title.startswith("Silk Thread Embroidery") for c in wide_admin.feed.records)


def test_grid_rebuild_has_no_search_field(wide_admin: CoursesAdmin) -> None:
    type_into(wide_admin.search_field, "Dyeing")

    assert wide_admin.grid_host.content is not None
    assert text_fields(wide_admin.grid_host.content) == []


def test_table_layout_pages(wide_admin: CoursesAdmin) -> None:
    assert wide_admin.grid.layout == LayoutMode.TABLE
    assert len(wide_admin.feed.records) == 10
    assert wide_admin.feed.pagination is not None
    assert wide_admin.feed.pagination.total_count == 24


def test_load_more_shows_fetching_sentinel(memory_ctx: ServiceContext) -> None:
    page = StubPage(400)
    admin = CoursesAdmin(page, memory_ctx)
    seen: list[SentinelView | None] = []
    page.on_update = lambda: seen.append(admin.grid.render().sentinel)
    admin.start()
    assert admin.grid.layout == LayoutMode.CARDS

    admin.sentinel.set_visible(True)

    assert any(s is not None and s.fetching for s in seen)
    assert len(admin.feed.records) == 24
    assert not admin.feed.has_next_page
