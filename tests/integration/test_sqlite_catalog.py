import sqlite3
from decimal import Decimal
from pathlib import Path

import pytest

from atelier.adapters.sqlite.migrator import SQLiteMigrator
from atelier.adapters.sqlite.repos import SQLiteCatalogRepo, build_where
from atelier.components.catalog import FindOptions, ListPageInput, run_list_page
from atelier.components.datagrid import SortOrder
from atelier.ui.context import ServiceContext

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


# --- WHERE builder ---


def test_build_where_empty() -> None:
    assert build_where({}) == ("1 = 1", [])


def test_build_where_equality_and_operators() -> None:
    sql, values = build_where({"category": "Tools", "price": {">=": 100, "<": 200}})

    assert sql == '"category" = ? AND ("price" >= ? AND "price" < ?)'
    assert values == ["Tools", 100, 200]


def test_build_where_like_in_and_nulls() -> None:
    sql, values = build_where(
        {"title": {"$like": "%silk%"}, "id": {"$in": [1, 2]}, "description": "IS_NULL"}
    )

    assert sql == '("title" LIKE ?) AND ("id" IN (?, ?)) AND "description" IS NULL'
    assert values == ["%silk%", 1, 2]


def test_build_where_or_group() -> None:
    sql, values = build_where({"$or": [{"category": "Tools"}, {"price": {"<=": 50}}]})

    assert sql == '(("category" = ?) OR (("price" <= ?)))'
    assert values == ["Tools", 50]


def test_build_where_rejects_bad_identifier() -> None:
    with pytest.raises(ValueError, match="Invalid identifier"):
        build_where({"title; DROP TABLE courses": "x"})


def test_build_where_rejects_unknown_operator() -> None:
    with pytest.raises(ValueError, match="Unsupported operator"):
        build_where({"price": {"$regex": ".*"}})


# --- Migrations ---


def test_migrator_creates_tables_once(tmp_path) -> None:
    path = str(tmp_path / "m.db")
    migrator = SQLiteMigrator(path, str(MIGRATIONS_DIR))

    assert migrator.run_migrations() == ["001_initial.sql"]
    assert migrator.run_migrations() == []

    conn = sqlite3.connect(path)
    names = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    conn.close()
    assert {"courses", "products", "_migrations"} <= names


# --- Repository ---


def test_create_assigns_id_and_timestamps(db_path: str) -> None:
    repo = SQLiteCatalogRepo(db_path, "courses")

    row = repo.create({"title": "Natural Dyeing", "max_price": Decimal("2500.50")})

    assert row["id"] == 1
    assert row["created_at"]
    assert Decimal(str(row["max_price"])) == Decimal("2500.50")


def test_update_and_destroy(db_path: str) -> None:
    repo = SQLiteCatalogRepo(db_path, "products")
    row = repo.create({"name": "Hoop", "category": "Tools", "price": 120})

    updated = repo.update(row["id"], {"price": 150})
    assert updated is not None
    assert updated["price"] == 150

    assert repo.update(999, {"price": 1}) is None
    assert repo.destroy(row["id"]) is True
    assert repo.destroy(row["id"]) is False
    assert repo.count({}) == 0


def test_find_orders_limits_and_offsets(sqlite_ctx: ServiceContext) -> None:
    repo = sqlite_ctx.course_repo

    rows = repo.find({}, FindOptions(limit=5, offset=5, order_by="id", order=SortOrder.ASC))

    assert [r["id"] for r in rows] == [6, 7, 8, 9, 10]


def test_offset_without_limit(sqlite_ctx: ServiceContext) -> None:
    rows = sqlite_ctx.course_repo.find({}, FindOptions(offset=20, order_by="id"))

    assert [r["id"] for r in rows] == [21, 22, 23, 24]


def test_like_is_case_insensitive(sqlite_ctx: ServiceContext) -> None:
    count = sqlite_ctx.course_repo.count({"title": {"$like": "%natural dyeing%"}})

    assert count == 3


# --- Service over SQLite ---


def test_list_page_over_sqlite(sqlite_ctx: ServiceContext) -> None:
    output = run_list_page(
        ListPageInput(page=2, limit=10, sort_by="title", sort_order=SortOrder.ASC),
        sqlite_ctx.course_service,
    )

    assert output.result is not None
    info = output.result.pagination
    assert (info.total_count, info.total_pages, info.has_prev_page, info.has_next_page) == (
        24,
        3,
        True,
        True,
    )
    titles = [c.title for c in output.result.records]
    assert titles == sorted(titles)


def test_price_sort_is_numeric(sqlite_ctx: ServiceContext) -> None:
    output = run_list_page(
        ListPageInput(limit=24, sort_by="max_price", sort_order=SortOrder.DESC),
        sqlite_ctx.course_service,
    )

    assert output.result is not None
    prices = [c.max_price for c in output.result.records]
    assert prices == sorted(prices, reverse=True)


def test_category_filter_over_sqlite(sqlite_ctx: ServiceContext) -> None:
    output = run_list_page(
        ListPageInput(limit=50, filters={"category": "Dyes"}), sqlite_ctx.product_service
    )

    assert output.result is not None
    assert output.result.pagination.total_count == 8
    assert {p.category for p in output.result.records} == {"Dyes"}


def test_get_over_sqlite(sqlite_ctx: ServiceContext) -> None:
    course = sqlite_ctx.course_service.get(3)

    assert course is not None
    assert course.title == "Natural Dyeing 1"
    assert sqlite_ctx.course_service.get(999) is None
