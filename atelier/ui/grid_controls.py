"""
Flet rendering of grid views.

Every interactive control forwards its element to `activate`, normally
`DataGrid.activate`, so the owning page's callbacks see the same actions
as the server-rendered grid.
"""

from collections.abc import Callable
from typing import Any

import flet as ft

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
    SentinelView,
)

Activate = Callable[[Any], Any]


def _content_control(content: Any) -> ft.Control:
    if isinstance(content, ft.Control):
        return content
    return ft.Text("" if content is None else str(content))


def build_search_field(search: SearchBox, on_search: Callable[[str], Any]) -> ft.TextField:
    return ft.TextField(
        value=search.value,
        hint_text=search.placeholder,
        prefix_icon=ft.Icons.SEARCH,
        dense=True,
        on_change=lambda e: on_search(e.control.value),
    )


def _header_control(cell: HeaderCell, activate: Activate) -> ft.Control:
    label = cell.label + (f" {cell.indicator}" if cell.indicator else "")
    if cell.clickable:
        return ft.TextButton(label, on_click=lambda _, c=cell: activate(c))
    return ft.Text(label, weight=ft.FontWeight.BOLD)


def build_table(headers: tuple[HeaderCell, ...], body: BodyView[Any], activate: Activate) -> ft.Control:
    columns = [ft.DataColumn(_header_control(cell, activate)) for cell in headers]

    if body.state != DisplayState.POPULATED:
        return ft.Column(
            [
                ft.DataTable(columns=columns, rows=[]),
                ft.Container(
                    content=ft.Text(body.message or "", italic=True),
                    alignment=ft.alignment.center,
                    padding=24,
                ),
            ]
        )

    rows = []
    for row in body.rows:
        rows.append(
            ft.DataRow(
                cells=[ft.DataCell(_content_control(cell.content)) for cell in row.cells],
                on_select_changed=(lambda _, r=row: activate(r)) if row.interactive else None,
                data=row.index,
            )
        )
    return ft.DataTable(columns=columns, rows=rows)


def _page_button(button: PageButton, activate: Activate) -> ft.Control:
    if button.kind == "ellipsis":
        return ft.Text(button.label)
    if button.current:
        return ft.FilledButton(button.label, disabled=True, data=button.page)
    return ft.OutlinedButton(
        button.label,
        disabled=not button.enabled,
        on_click=lambda _, b=button: activate(b),
        data=button.page,
    )


def build_pagination(pagination: PaginationView, activate: Activate) -> ft.Control:
    controls: list[ft.Control] = []
    if pagination.info:
        controls.append(ft.Text(pagination.info, size=12))
    if pagination.page_size_options:
        selected = next((o.size for o in pagination.page_size_options if o.selected), None)
        controls.append(
            ft.Dropdown(
                value=str(selected) if selected is not None else None,
                options=[ft.dropdown.Option(str(o.size)) for o in pagination.page_size_options],
                width=90,
                on_change=lambda e: activate(GridAction("page_size", int(e.control.value))),
            )
        )
    controls.append(_page_button(pagination.previous, activate))
    controls.extend(_page_button(b, activate) for b in pagination.pages)
    controls.append(_page_button(pagination.next, activate))
    return ft.Row(controls, wrap=True, alignment=ft.MainAxisAlignment.END)


def build_card(card: CardView[Any], activate: Activate) -> ft.Control:
    lines: list[ft.Control] = [
        ft.Row(
            [
                ft.Text(field.label, weight=ft.FontWeight.BOLD, size=12),
                _content_control(field.content),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )
        for field in card.fields
    ]
    if card.actions is not None:
        lines.append(ft.Divider())
        lines.append(_content_control(card.actions))

    return ft.Card(
        content=ft.Container(
            content=ft.Column(lines, spacing=6),
            padding=12,
            on_click=(lambda _, c=card: activate(c)) if card.interactive else None,
        ),
        data=card.index,
    )


def build_sentinel(sentinel: SentinelView) -> ft.Control:
    content: ft.Control
    if sentinel.fetching:
        content = ft.Row(
            [ft.ProgressRing(width=16, height=16), ft.Text(sentinel.message or "")],
            alignment=ft.MainAxisAlignment.CENTER,
        )
    else:
        content = ft.Text("")
    return ft.Container(content=content, height=40, alignment=ft.alignment.center)


def build_grid_control(
    view: GridView[Any],
    activate: Activate,
    on_search: Callable[[str], Any] | None = None,
) -> ft.Control:
    """Build the Flet control tree for a rendered grid."""
    if view.state == DisplayState.ERROR:
        return ft.Container(
            content=ft.Text(view.error or "", color="red"),
            padding=16,
        )

    controls: list[ft.Control] = []
    toolbar: list[ft.Control] = []
    if view.title:
        toolbar.append(ft.Text(view.title, size=20, weight=ft.FontWeight.BOLD))
    if view.search and on_search is not None:
        toolbar.append(build_search_field(view.search, on_search))
    if toolbar:
        controls.append(ft.Row(toolbar, alignment=ft.MainAxisAlignment.SPACE_BETWEEN))

    if view.layout == LayoutMode.TABLE:
        if view.body is not None:
            controls.append(build_table(view.headers, view.body, activate))
    elif view.message:
        controls.append(
            ft.Container(
                content=ft.Text(view.message, italic=True),
                alignment=ft.alignment.center,
                padding=24,
            )
        )
    else:
        controls.extend(build_card(card, activate) for card in view.cards)

    if view.sentinel is not None:
        controls.append(build_sentinel(view.sentinel))
    if view.pagination is not None:
        controls.append(build_pagination(view.pagination, activate))

    return ft.Column(controls, spacing=12)
