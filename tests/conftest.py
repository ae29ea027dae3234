import os
from pathlib import Path

import pytest

from atelier.adapters.memory_catalog import InMemoryCatalogRepo
from atelier.adapters.sqlite.migrator import SQLiteMigrator
from atelier.app_shell.seed import seed_catalog
from atelier.rules.loader import load_rules
from atelier.rules.models import Rules
from atelier.ui.context import ServiceContext

PROJECT_ROOT = Path(__file__).resolve().parents[1]
RULES_PATH = PROJECT_ROOT / "rules.yaml"
MIGRATIONS_DIR = PROJECT_ROOT / "migrations"


@pytest.fixture
def rules() -> Rules:
    """The real rules file from the project root."""
    return load_rules(RULES_PATH)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """A migrated, empty SQLite database."""
    path = os.path.join(tmp_path, "atelier.db")
    SQLiteMigrator(path, str(MIGRATIONS_DIR)).run_migrations()
    return path


@pytest.fixture
def sqlite_ctx(db_path: str, rules: Rules) -> ServiceContext:
    """ServiceContext backed by a seeded temporary SQLite database."""
    ctx = ServiceContext.create(db_path, rules)
    seed_catalog(ctx.course_repo, ctx.product_repo, count=24)
    return ctx


@pytest.fixture
def memory_ctx(rules: Rules) -> ServiceContext:
    """ServiceContext backed by seeded in-memory repositories."""
    ctx = ServiceContext.from_repos(InMemoryCatalogRepo(), InMemoryCatalogRepo(), rules)
    seed_catalog(ctx.course_repo, ctx.product_repo, count=24)
    return ctx
