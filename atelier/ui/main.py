import logging
import os
from pathlib import Path
from typing import Any

import flet as ft

from atelier.adapters.sentinel import FletScrollSentinel
from atelier.adapters.sqlite.migrator import SQLiteMigrator
from atelier.adapters.viewport import FletPageViewport
from atelier.app_shell.config import validate_ops_rules
from atelier.components.catalog import Course, ListPageInput, run_list_page
from atelier.components.datagrid import (
    ACTIONS_KEY,
    Column,
    GridAction,
    GridCallbacks,
    GridProps,
    GridQueryState,
    InfiniteFeed,
    LayoutMode,
    PageResult,
    ResponsiveDataGrid,
    SearchBox,
)
from atelier.rules.loader import load_rules
from atelier.ui.context import ServiceContext
from atelier.ui.grid_controls import build_grid_control, build_search_field

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Configuration from environment (with sensible defaults for local dev)
DATA_DIR = os.environ.get("ATELIER_DATA_DIR", "./data")
DB_PATH = os.environ.get("ATELIER_DB_PATH", f"{DATA_DIR}/atelier.db")
RULES_PATH = os.environ.get("ATELIER_RULES_PATH", "rules.yaml")


def course_columns(on_open: Any) -> list[Column[Course]]:
    return [
        Column("title", "Title", sortable=True),
        Column("max_price", "Price", sortable=True, render=lambda c, _: f"{c.max_price:,.2f}"),
        Column(
            "discounted_price",
            "Discounted",
            sortable=True,
            render=lambda c, _: f"{c.discounted_price:,.2f}",
        ),
        Column("created_at", "Created", sortable=True),
        Column(
            ACTIONS_KEY,
            "Actions",
            render=lambda c, _: ft.IconButton(
                ft.Icons.OPEN_IN_NEW, on_click=lambda _, course=c: on_open(course)
            ),
        ),
    ]


class CoursesAdmin:
    """Courses grid: paged table on desktop, infinite cards on narrow windows."""

    def __init__(self, page: ft.Page, ctx: ServiceContext):
        self.page = page
        self.ctx = ctx
        grid_rules = ctx.rules.grid
        self.query = GridQueryState(limit=grid_rules.default_page_size)
        self.columns = course_columns(self._open_course)
        self.sentinel = FletScrollSentinel()
        self.search_field = build_search_field(
            SearchBox(value=self.query.search, placeholder=grid_rules.messages.search_placeholder),
            self._on_search_input,
        )
        self.grid_host = ft.Container()
        self.container = ft.Column(
            [self.search_field, self.grid_host],
            scroll=ft.ScrollMode.AUTO,
            expand=True,
            on_scroll=self.sentinel.handle_scroll,
        )
        self.feed: InfiniteFeed[Course] = InfiniteFeed(self._fetch_page)
        self.grid: ResponsiveDataGrid[Course] = ResponsiveDataGrid(
            self._props(),
            FletPageViewport(page),
            self.sentinel,
            breakpoint=grid_rules.mobile_breakpoint_px,
            on_layout_change=self._on_layout_change,
        )

    def start(self) -> None:
        self.grid.mount()
        self._reload()

    def _fetch_page(self, page_no: int) -> PageResult[Course]:
        output = run_list_page(
            ListPageInput(
                page=page_no,
                limit=self.query.limit,
                search=self.query.search,
                sort_by=self.query.sort.sort_by,
                sort_order=self.query.sort.sort_order,
            ),
            self.ctx.course_service,
        )
        if output.result is None:
            raise ValueError("; ".join(e.message for e in output.errors))
        return output.result

    def _props(self) -> GridProps[Course]:
        messages = self.ctx.rules.grid.messages
        return GridProps(
            records=self.feed.records,
            columns=self.columns,
            pagination=self.feed.pagination,
            loading=self.feed.is_loading,
            error=self.feed.error,
            sort=self.query.sort,
            callbacks=GridCallbacks(
                on_sort=lambda key: self._apply(GridAction("sort", key)),
                on_page_change=lambda p: self._apply(GridAction("page", p)),
                on_page_size_change=lambda size: self._apply(GridAction("page_size", size)),
                on_search_change=lambda term: self._apply(GridAction("search", term)),
                on_row_click=self._open_course,
                on_load_more=self._load_more,
            ),
            search_term=self.query.search,
            search_placeholder=messages.search_placeholder,
            empty_message=messages.empty,
            loading_message=messages.loading,
            loading_more_message=messages.loading_more,
            page_size_options=tuple(self.ctx.rules.grid.page_size_options),
            title="Courses",
            enable_infinite_scroll=True,
            has_next_page=self.feed.has_next_page,
            is_fetching_next_page=self.feed.is_fetching_next_page,
        )

    def _apply(self, action: GridAction) -> None:
        self.query = self.query.apply(action)
        self._reload()

    def _reload(self) -> None:
        initial_page = self.query.page if self.grid.layout == LayoutMode.TABLE else 1
        self.feed = InfiniteFeed(self._fetch_page, initial_page=initial_page, on_change=self.refresh)
        self.feed.load()

    def _load_more(self) -> None:
        self.page.run_thread(self.feed.fetch_next_page)

    def _on_search_input(self, term: str) -> None:
        self.grid.change_search(term)

    def _on_layout_change(self, layout: LayoutMode) -> None:
        logger.info("Courses grid switched to %s layout", layout.value)
        self._reload()

    def _open_course(self, course: Course) -> None:
        self.page.open(ft.SnackBar(ft.Text(f"{course.title} (#{course.id})")))

    def refresh(self) -> None:
        self.grid.update(self._props())
        view = self.grid.render()
        self.grid_host.content = build_grid_control(view, self.grid.activate)
        self.page.update()


def main(page: ft.Page) -> None:
    page.title = "Atelier Admin"
    page.theme_mode = ft.ThemeMode.LIGHT

    data_dir = Path(DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Data directory: {data_dir.absolute()}")
    logger.info(f"Database path: {DB_PATH}")

    rules_path = Path(RULES_PATH)
    if not rules_path.exists():
        error_msg = f"Error: {RULES_PATH} not found. Please create it."
        logger.error(error_msg)
        page.add(ft.Text(error_msg, color="red", size=20))
        return

    rules = load_rules(rules_path)
    logger.info("Rules loaded successfully")
    validate_ops_rules(rules, data_dir)

    SQLiteMigrator(DB_PATH, "migrations").run_migrations()

    ctx = ServiceContext.create(DB_PATH, rules)
    admin = CoursesAdmin(page, ctx)
    page.add(admin.container)
    admin.start()


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
