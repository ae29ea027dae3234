from .migrator import SQLiteMigrator
from .repos import SQLiteCatalogRepo, build_where

__all__ = ["SQLiteCatalogRepo", "SQLiteMigrator", "build_where"]
