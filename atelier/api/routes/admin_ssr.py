"""
Admin SSR Routes - Server-side rendered catalog grids.

Each grid interaction is a link to the next query, so the pages work
without client-side code. `view=cards` forces the card layout and `vw`
passes the client viewport width to the breakpoint classifier.
"""

import logging
import sqlite3
from dataclasses import replace
from decimal import Decimal
from typing import Any, TypeVar
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from atelier.adapters.render.html_grid import SafeHtml, render_grid_html
from atelier.adapters.viewport import FixedViewport
from atelier.api.deps import get_course_service, get_product_service, get_rules, list_page_params
from atelier.components.catalog import (
    CatalogService,
    Course,
    ListPageInput,
    Product,
    run_list_page,
)
from atelier.components.datagrid import (
    ACTIONS_KEY,
    Column,
    GridAction,
    GridCallbacks,
    GridProps,
    GridQueryState,
    ResponsiveDataGrid,
    SortState,
    run_render,
)
from atelier.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")

DEFAULT_VIEWPORT_WIDTH = 1280


# --- Columns ---


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


def _json_link(path: str) -> SafeHtml:
    return SafeHtml(f'<a href="{path}" class="action">View</a>')


COURSE_COLUMNS: tuple[Column[Course], ...] = (
    Column("title", "Title", sortable=True),
    Column("max_price", "Price", sortable=True, render=lambda c, _: _money(c.max_price)),
    Column(
        "discounted_price",
        "Discounted",
        sortable=True,
        render=lambda c, _: _money(c.discounted_price),
    ),
    Column("created_at", "Created", sortable=True),
    Column(ACTIONS_KEY, "Actions", render=lambda c, _: _json_link(f"/api/courses/{c.id}")),
)

PRODUCT_COLUMNS: tuple[Column[Product], ...] = (
    Column("name", "Name", sortable=True),
    Column("category", "Category", sortable=True),
    Column("price", "Price", sortable=True, render=lambda p, _: _money(p.price)),
    Column("is_featured", "Featured", render=lambda p, _: "Yes" if p.is_featured else "No"),
    Column(ACTIONS_KEY, "Actions", render=lambda p, _: _json_link(f"/api/products/{p.id}")),
)


# --- HTML Rendering ---


def render_admin_page(title: str, body_content: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{title} - Atelier Admin</title>
</head>
<body>
    {body_content}
</body>
</html>"""


def _noop(_: Any = None) -> None:
    return None


def render_catalog_grid(
    title: str,
    input_data: ListPageInput,
    service: CatalogService[T],
    columns: tuple[Column[T], ...],
    rules: Rules,
    view: str,
    vw: int | None,
    extra_params: dict[str, str] | None = None,
) -> HTMLResponse:
    """Run the listing and render it as a grid page."""
    state = GridQueryState(
        page=input_data.page,
        limit=input_data.limit,
        search=input_data.search,
        sort=SortState(input_data.sort_by, input_data.sort_order),
    )
    sticky = {k: v for k, v in (extra_params or {}).items() if v}
    if view == "cards":
        sticky["view"] = "cards"
    if vw is not None:
        sticky["vw"] = str(vw)

    def href_for(action: GridAction) -> str:
        return "?" + urlencode({**state.apply(action).to_params(), **sticky})

    messages = rules.grid.messages
    props: GridProps[T] = GridProps(
        records=(),
        columns=columns,
        sort=state.sort,
        callbacks=GridCallbacks(
            on_sort=_noop,
            on_page_change=_noop,
            on_page_size_change=_noop,
            on_search_change=_noop,
        ),
        search_term=state.search,
        search_placeholder=messages.search_placeholder,
        empty_message=messages.empty,
        loading_message=messages.loading,
        loading_more_message=messages.loading_more,
        page_size_options=tuple(rules.grid.page_size_options),
        title=title,
        card_layout=view == "cards",
    )

    status_code = 200
    try:
        output = run_list_page(input_data, service)
    except sqlite3.Error:
        logger.exception("Error fetching %s", service.config.table)
        props = replace(props, error=f"Failed to fetch {service.config.table}")
        status_code = 500
    else:
        if output.result is None:
            props = replace(props, error="; ".join(e.message for e in output.errors))
            status_code = 400
        else:
            props = replace(
                props,
                records=output.result.records,
                pagination=output.result.pagination,
            )

    grid = ResponsiveDataGrid(
        props,
        FixedViewport(vw if vw is not None else DEFAULT_VIEWPORT_WIDTH),
        breakpoint=rules.grid.mobile_breakpoint_px,
    )
    grid.mount()
    rendered = run_render(grid)
    grid.unmount()

    if not rendered.success or rendered.view is None:
        # Column definitions are fixed in this module
        raise RuntimeError("; ".join(e.message for e in rendered.errors))

    query = {**state.to_params(), **sticky}
    body = render_grid_html(rendered.view, href_for, query)
    return HTMLResponse(content=render_admin_page(title, body), status_code=status_code)


# --- SSR Endpoints ---


@router.get("/admin/courses", response_class=HTMLResponse)
def admin_courses(
    input_data: ListPageInput = Depends(list_page_params),
    view: str = Query(default="table", pattern="^(table|cards)$"),
    vw: int | None = Query(default=None, ge=0),
    service: CatalogService[Course] = Depends(get_course_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return render_catalog_grid("Courses", input_data, service, COURSE_COLUMNS, rules, view, vw)


@router.get("/admin/products", response_class=HTMLResponse)
def admin_products(
    input_data: ListPageInput = Depends(list_page_params),
    category: str = Query(default=""),
    view: str = Query(default="table", pattern="^(table|cards)$"),
    vw: int | None = Query(default=None, ge=0),
    service: CatalogService[Product] = Depends(get_product_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    if category:
        input_data = replace(input_data, filters={"category": category})
    return render_catalog_grid(
        "Products",
        input_data,
        service,
        PRODUCT_COLUMNS,
        rules,
        view,
        vw,
        extra_params={"category": category},
    )
