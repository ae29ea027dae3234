from __future__ import annotations

from dataclasses import dataclass

from atelier.adapters.sqlite.repos import SQLiteCatalogRepo
from atelier.app_shell.config import table_config
from atelier.components.catalog import CatalogRepoPort, CatalogService, Course, Product
from atelier.rules.models import Rules


@dataclass
class ServiceContext:
    course_service: CatalogService[Course]
    product_service: CatalogService[Product]
    course_repo: CatalogRepoPort
    product_repo: CatalogRepoPort
    rules: Rules

    @classmethod
    def create(cls, db_path: str, rules: Rules) -> ServiceContext:
        return cls.from_repos(
            SQLiteCatalogRepo(db_path, "courses"),
            SQLiteCatalogRepo(db_path, "products"),
            rules,
        )

    @classmethod
    def from_repos(
        cls, course_repo: CatalogRepoPort, product_repo: CatalogRepoPort, rules: Rules
    ) -> ServiceContext:
        max_page_size = rules.grid.max_page_size
        return cls(
            course_service=CatalogService(
                course_repo, table_config("courses", rules), Course.from_row, max_page_size
            ),
            product_service=CatalogService(
                product_repo, table_config("products", rules), Product.from_row, max_page_size
            ),
            course_repo=course_repo,
            product_repo=product_repo,
            rules=rules,
        )
