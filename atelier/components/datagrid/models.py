"""
Datagrid component - Data models.

Column descriptors, pagination/sort state, grid actions and the immutable
view tree produced by a render.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")

ELLIPSIS = "..."
ACTIONS_KEY = "actions"

PageToken = int | str
ActionKind = Literal["sort", "page", "page_size", "search", "row", "load_more"]


# --- Errors ---


@dataclass(frozen=True)
class GridValidationError:
    """Grid configuration error."""

    code: str
    message: str
    field: str | None = None


class GridConfigError(ValueError):
    """Raised when a grid is rendered with invalid columns or pagination."""

    def __init__(self, errors: Sequence[GridValidationError]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(e.message for e in self.errors))


class CellRenderError(TypeError):
    """Raised when a cell cannot be rendered without a render function."""


# --- Enums ---


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: str | SortOrder | None) -> SortOrder:
        """Parse either case; anything unrecognised falls back to DESC."""
        if isinstance(value, SortOrder):
            return value
        if value and value.upper() == "ASC":
            return cls.ASC
        return cls.DESC


class DisplayState(str, Enum):
    ERROR = "error"
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class LayoutMode(str, Enum):
    TABLE = "table"
    CARDS = "cards"


# --- Descriptors and State ---


@dataclass(frozen=True)
class Column(Generic[T]):
    """How one field of a record is shown as a table column or card field."""

    key: str
    label: str
    sortable: bool = False
    render: Callable[[T, int], Any] | None = None
    class_name: str = ""
    header_class_name: str = ""


@dataclass(frozen=True)
class PaginationInfo:
    """One page of a larger result set."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_counts(cls, page: int, limit: int, total_count: int) -> PaginationInfo:
        total_pages = math.ceil(total_count / limit) if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


@dataclass(frozen=True)
class SortState:
    """Current sort; an empty sort_by means server-default order."""

    sort_by: str = ""
    sort_order: SortOrder = SortOrder.DESC

    @property
    def is_sorted(self) -> bool:
        return bool(self.sort_by)


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """A page of records with its pagination metadata."""

    records: tuple[T, ...]
    pagination: PaginationInfo


# --- Actions and Callbacks ---


@dataclass(frozen=True)
class GridAction:
    """An interaction attached to a rendered element."""

    kind: ActionKind
    value: Any = None


@dataclass
class GridCallbacks(Generic[T]):
    """Callbacks supplied by the page that owns the grid."""

    on_sort: Callable[[str], None] | None = None
    on_page_change: Callable[[int], None] | None = None
    on_page_size_change: Callable[[int], None] | None = None
    on_search_change: Callable[[str], None] | None = None
    on_row_click: Callable[[T], None] | None = None
    on_load_more: Callable[[], None] | None = None

    def dispatch(self, action: GridAction) -> bool:
        """
        Invoke the callback matching the action.

        Returns:
            True if a callback was invoked, False if none is registered.
        """
        if action.kind == "sort" and self.on_sort:
            self.on_sort(action.value)
        elif action.kind == "page" and self.on_page_change:
            self.on_page_change(action.value)
        elif action.kind == "page_size" and self.on_page_size_change:
            self.on_page_size_change(action.value)
        elif action.kind == "search" and self.on_search_change:
            self.on_search_change(action.value)
        elif action.kind == "row" and self.on_row_click:
            self.on_row_click(action.value)
        elif action.kind == "load_more" and self.on_load_more:
            self.on_load_more()
        else:
            return False
        return True


# --- Props ---


@dataclass
class GridProps(Generic[T]):
    """Everything the owning page passes into a grid on each render."""

    records: Sequence[T]
    columns: Sequence[Column[T]]
    pagination: PaginationInfo | None = None
    loading: bool = False
    error: str | None = None
    sort: SortState = field(default_factory=SortState)
    callbacks: GridCallbacks[T] = field(default_factory=GridCallbacks)

    # Search
    search_term: str = ""
    search_placeholder: str = "Search..."
    show_search: bool = True

    # Messages
    empty_message: str = "No data found."
    loading_message: str = "Loading..."
    loading_more_message: str = "Loading more..."

    # Pagination
    page_size_options: tuple[int, ...] = (5, 10, 25, 50)
    show_page_size_selector: bool = True
    show_pagination_info: bool = True

    # Title and styling
    title: str | None = None
    show_title: bool = True
    row_class_name: str | Callable[[T, int], str] = ""
    card_class_name: str = ""

    # Responsive only
    card_layout: bool = False
    enable_infinite_scroll: bool = False
    has_next_page: bool = False
    is_fetching_next_page: bool = False


# --- View Tree ---


@dataclass(frozen=True)
class HeaderCell:
    key: str
    label: str
    sortable: bool
    active: bool
    indicator: str | None
    clickable: bool
    class_name: str = ""
    action: GridAction | None = None


@dataclass(frozen=True)
class BodyCell:
    key: str
    content: Any
    class_name: str = ""


@dataclass(frozen=True)
class RowView(Generic[T]):
    record: T
    index: int
    cells: tuple[BodyCell, ...]
    interactive: bool
    class_name: str = ""
    action: GridAction | None = None


@dataclass(frozen=True)
class BodyView(Generic[T]):
    state: DisplayState
    column_count: int
    message: str | None = None
    rows: tuple[RowView[T], ...] = ()


@dataclass(frozen=True)
class PageButton:
    kind: Literal["previous", "next", "page", "ellipsis"]
    label: str
    page: int | None
    enabled: bool
    current: bool = False
    action: GridAction | None = None


@dataclass(frozen=True)
class PageSizeOption:
    size: int
    selected: bool
    action: GridAction


@dataclass(frozen=True)
class PaginationView:
    previous: PageButton
    pages: tuple[PageButton, ...]
    next: PageButton
    page_size_options: tuple[PageSizeOption, ...] = ()
    info: str | None = None


@dataclass(frozen=True)
class SearchBox:
    value: str
    placeholder: str


@dataclass(frozen=True)
class CardField:
    key: str
    label: str
    content: Any


@dataclass(frozen=True)
class CardView(Generic[T]):
    record: T
    index: int
    fields: tuple[CardField, ...]
    actions: Any = None
    interactive: bool = False
    class_name: str = ""
    action: GridAction | None = None


@dataclass(frozen=True)
class SentinelView:
    fetching: bool
    message: str | None = None


@dataclass(frozen=True)
class GridView(Generic[T]):
    """Immutable result of rendering a grid."""

    layout: LayoutMode
    state: DisplayState
    title: str | None = None
    error: str | None = None
    message: str | None = None
    search: SearchBox | None = None
    headers: tuple[HeaderCell, ...] = ()
    body: BodyView[T] | None = None
    cards: tuple[CardView[T], ...] = ()
    pagination: PaginationView | None = None
    sentinel: SentinelView | None = None
