"""
HTML rendering of grid views for server-side pages.

Interactive elements become links: the caller supplies `href_for`, which
turns an element's GridAction into the URL of the next query.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from atelier.components.datagrid import (
    BodyView,
    CardView,
    DisplayState,
    GridAction,
    GridView,
    HeaderCell,
    LayoutMode,
    PageButton,
    PaginationView,
    SearchBox,
)

HrefFor = Callable[[GridAction], str]


class SafeHtml(str):
    """Markup that is inserted without escaping."""


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _content(value: Any) -> str:
    if isinstance(value, SafeHtml):
        return str(value)
    if value is None:
        return ""
    return _escape_html(str(value))


def _class_attr(*names: str) -> str:
    joined = " ".join(n for n in names if n)
    return f' class="{_escape_html(joined)}"' if joined else ""


def _link(label: str, action: GridAction | None, href_for: HrefFor, *classes: str) -> str:
    if action is None:
        return f'<span{_class_attr(*classes, "disabled")}>{_escape_html(label)}</span>'
    href = _escape_html(href_for(action))
    return f'<a href="{href}"{_class_attr(*classes)}>{_escape_html(label)}</a>'


def render_search_html(search: SearchBox, hidden: Mapping[str, str]) -> str:
    inputs = "".join(
        f'<input type="hidden" name="{_escape_html(k)}" value="{_escape_html(v)}" />'
        for k, v in hidden.items()
        if k not in ("search", "page")
    )
    return (
        '<form method="get" class="grid-search">'
        f"{inputs}"
        f'<input type="search" name="search" value="{_escape_html(search.value)}" '
        f'placeholder="{_escape_html(search.placeholder)}" />'
        "</form>"
    )


def _header_html(cell: HeaderCell, href_for: HrefFor) -> str:
    label = cell.label + (f" {cell.indicator}" if cell.indicator else "")
    if cell.clickable:
        inner = _link(label, cell.action, href_for, "sort-link")
    else:
        inner = _escape_html(label)
    return f"<th{_class_attr(cell.class_name, 'active' if cell.active else '')}>{inner}</th>"


def render_body_html(body: BodyView[Any], href_for: HrefFor) -> str:
    if body.state != DisplayState.POPULATED:
        return (
            f'<tbody><tr><td colspan="{body.column_count}" class="grid-message">'
            f"{_escape_html(body.message or '')}</td></tr></tbody>"
        )

    rows = []
    for row in body.rows:
        cells = "".join(
            f"<td{_class_attr(cell.class_name)}>{_content(cell.content)}</td>" for cell in row.cells
        )
        attrs = _class_attr(row.class_name, "clickable" if row.interactive else "")
        if row.action is not None:
            attrs += f' data-href="{_escape_html(href_for(row.action))}"'
        rows.append(f"<tr{attrs}>{cells}</tr>")
    return "<tbody>" + "".join(rows) + "</tbody>"


def _page_button_html(button: PageButton, href_for: HrefFor) -> str:
    if button.kind == "ellipsis":
        return '<span class="ellipsis">...</span>'
    if button.current:
        return f'<span class="page current" aria-current="page">{_escape_html(button.label)}</span>'
    return _link(button.label, button.action, href_for, "page" if button.kind == "page" else button.kind)


def render_pagination_html(pagination: PaginationView, href_for: HrefFor) -> str:
    parts = ['<nav class="grid-pagination">']
    if pagination.info:
        parts.append(f'<span class="info">{_escape_html(pagination.info)}</span>')
    if pagination.page_size_options:
        options = " ".join(
            f'<strong>{option.size}</strong>'
            if option.selected
            else _link(str(option.size), option.action, href_for, "page-size")
            for option in pagination.page_size_options
        )
        parts.append(f'<span class="page-size">Show: {options}</span>')
    parts.append(_page_button_html(pagination.previous, href_for))
    parts.extend(_page_button_html(b, href_for) for b in pagination.pages)
    parts.append(_page_button_html(pagination.next, href_for))
    parts.append("</nav>")
    return "".join(parts)


def _card_html(card: CardView[Any], href_for: HrefFor) -> str:
    fields = "".join(
        f'<div class="card-field"><span class="label">{_escape_html(f.label)}</span>'
        f'<span class="value">{_content(f.content)}</span></div>'
        for f in card.fields
    )
    actions = ""
    if card.actions is not None:
        actions = f'<div class="card-actions">{_content(card.actions)}</div>'
    attrs = _class_attr("grid-card", card.class_name, "clickable" if card.interactive else "")
    if card.action is not None:
        attrs += f' data-href="{_escape_html(href_for(card.action))}"'
    return f"<article{attrs}>{fields}{actions}</article>"


def render_grid_html(
    view: GridView[Any],
    href_for: HrefFor,
    query: Mapping[str, str] | None = None,
) -> str:
    """
    Render a grid view as an HTML fragment.

    `query` holds the current query parameters, kept as hidden fields in the
    search form.
    """
    if view.state == DisplayState.ERROR:
        return f'<div class="grid-error" role="alert">{_escape_html(view.error or "")}</div>'

    parts = [f'<section class="data-grid {view.layout.value}">']
    if view.title or view.search:
        parts.append('<header class="grid-toolbar">')
        if view.title:
            parts.append(f"<h2>{_escape_html(view.title)}</h2>")
        if view.search:
            parts.append(render_search_html(view.search, query or {}))
        parts.append("</header>")

    if view.layout == LayoutMode.TABLE:
        headers = "".join(_header_html(cell, href_for) for cell in view.headers)
        parts.append(f"<table><thead><tr>{headers}</tr></thead>")
        if view.body is not None:
            parts.append(render_body_html(view.body, href_for))
        parts.append("</table>")
    elif view.message:
        parts.append(f'<p class="grid-message">{_escape_html(view.message)}</p>')
    else:
        parts.append('<div class="grid-cards">')
        parts.extend(_card_html(card, href_for) for card in view.cards)
        parts.append("</div>")

    if view.sentinel is not None:
        parts.append(f'<div class="grid-sentinel">{_escape_html(view.sentinel.message or "")}</div>')
    if view.pagination is not None:
        parts.append(render_pagination_html(view.pagination, href_for))

    parts.append("</section>")
    return "".join(parts)
