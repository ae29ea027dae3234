"""
Server-rendered admin grid tests.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from atelier.api.deps import get_course_repo, get_product_repo, get_rules
from atelier.api.main import app
from atelier.rules.models import Rules
from atelier.ui.context import ServiceContext


class BrokenRepo:
    def find(self, criteria: Any, options: Any) -> list[dict[str, Any]]:
        raise sqlite3.OperationalError("database is locked")

    def count(self, criteria: Any) -> int:
        raise sqlite3.OperationalError("database is locked")


@pytest.fixture
def client(memory_ctx: ServiceContext, rules: Rules) -> Iterator[TestClient]:
    app.dependency_overrides[get_course_repo] = lambda: memory_ctx.course_repo
    app.dependency_overrides[get_product_repo] = lambda: memory_ctx.product_repo
    app.dependency_overrides[get_rules] = lambda: rules
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_courses_table(client: TestClient) -> None:
    response = client.get("/admin/courses")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "<title>Courses - Atelier Admin</title>" in html
    assert '<section class="data-grid table">' in html
    assert html.count("<tr") == 11
    assert "Page 1 of 3 (24 total)" in html
    assert 'href="/api/courses/24"' in html


def test_sort_link_starts_descending(client: TestClient) -> None:
    html = client.get("/admin/courses").text

    assert 'href="?page=1&amp;limit=10&amp;sort_by=title&amp;sort_order=DESC"' in html


def test_sorted_header_shows_indicator_and_flips(client: TestClient) -> None:
    html = client.get(
        "/admin/courses", params={"sort_by": "title", "sort_order": "DESC"}
    ).text

    assert "Title ↓" in html
    assert "sort_by=title&amp;sort_order=ASC" in html


def test_links_keep_view_and_width(client: TestClient) -> None:
    html = client.get("/admin/courses", params={"view": "cards", "vw": 1200}).text

    assert '<section class="data-grid cards">' in html
    assert 'href="?page=2&amp;limit=10&amp;view=cards&amp;vw=1200"' in html


def test_narrow_width_hint_renders_cards(client: TestClient) -> None:
    html = client.get("/admin/courses", params={"vw": 375}).text

    assert '<section class="data-grid cards">' in html
    assert html.count('<article class="grid-card">') == 10
    assert "<table>" not in html


def test_search_form_and_empty_result(client: TestClient) -> None:
    html = client.get("/admin/courses", params={"search": "no such course"}).text

    assert 'value="no such course"' in html
    assert "No data found." in html
    assert "grid-pagination" not in html


def test_products_category_kept_in_links(client: TestClient) -> None:
    html = client.get("/admin/products", params={"category": "Threads", "limit": 5}).text

    assert "Page 1 of 2 (8 total)" in html
    assert "category=Threads" in html


def test_invalid_page_renders_error_grid(client: TestClient) -> None:
    response = client.get("/admin/courses", params={"page": 0})

    assert response.status_code == 400
    assert '<div class="grid-error" role="alert">Page must be 1 or greater</div>' in response.text


def test_database_failure_renders_error_grid(client: TestClient) -> None:
    app.dependency_overrides[get_course_repo] = lambda: BrokenRepo()

    response = client.get("/admin/courses")

    assert response.status_code == 500
    assert "Failed to fetch courses" in response.text
    assert "<table>" not in response.text


def test_invalid_view_is_rejected(client: TestClient) -> None:
    assert client.get("/admin/courses", params={"view": "grid"}).status_code == 422
