import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Query

from atelier.adapters.sqlite.repos import SQLiteCatalogRepo
from atelier.app_shell.config import table_config
from atelier.components.catalog import (
    CatalogRepoPort,
    CatalogService,
    Course,
    ListPageInput,
    Product,
)
from atelier.components.datagrid import SortOrder
from atelier.rules.loader import load_rules
from atelier.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ATELIER_DATA_DIR", "./data"))
        self.db_path = os.environ.get("ATELIER_DB_PATH", str(self.data_dir / "atelier.db"))
        self.rules_path = Path(os.environ.get("ATELIER_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.migrations_dir = self.base_dir / "migrations"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


# --- Repos ---
def get_course_repo(settings: Settings = Depends(get_settings)) -> CatalogRepoPort:
    return SQLiteCatalogRepo(settings.db_path, "courses")


def get_product_repo(settings: Settings = Depends(get_settings)) -> CatalogRepoPort:
    return SQLiteCatalogRepo(settings.db_path, "products")


# --- Services ---
def get_course_service(
    repo: CatalogRepoPort = Depends(get_course_repo),
    rules: Rules = Depends(get_rules),
) -> CatalogService[Course]:
    return CatalogService(
        repo, table_config("courses", rules), Course.from_row, rules.grid.max_page_size
    )


def get_product_service(
    repo: CatalogRepoPort = Depends(get_product_repo),
    rules: Rules = Depends(get_rules),
) -> CatalogService[Product]:
    return CatalogService(
        repo, table_config("products", rules), Product.from_row, rules.grid.max_page_size
    )


# --- Query Parameters ---
def list_page_params(
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int | None, Query()] = None,
    search: Annotated[str, Query()] = "",
    sort_by: Annotated[str, Query()] = "",
    sort_order: Annotated[str, Query()] = "DESC",
    rules: Rules = Depends(get_rules),
) -> ListPageInput:
    return ListPageInput(
        page=page,
        limit=rules.grid.default_page_size if limit is None else limit,
        search=search,
        sort_by=sort_by,
        sort_order=SortOrder.parse(sort_order),
    )
