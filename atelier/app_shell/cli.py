import argparse
import logging
import os
import sys
from pathlib import Path

from atelier.adapters.sqlite.migrator import SQLiteMigrator
from atelier.app_shell.seed import seed_catalog
from atelier.components.catalog import ListPageInput, run_list_page
from atelier.components.datagrid import SortOrder, generate_page_tokens
from atelier.rules.loader import load_rules
from atelier.ui.context import ServiceContext

logger = logging.getLogger("cli")

DATA_DIR = os.environ.get("ATELIER_DATA_DIR", "./data")
DB_PATH = os.environ.get("ATELIER_DB_PATH", f"{DATA_DIR}/atelier.db")
RULES_PATH = os.environ.get("ATELIER_RULES_PATH", "rules.yaml")
MIGRATIONS_DIR = "migrations"


def get_context(db_path: str, rules_path: str) -> ServiceContext:
    if not Path(rules_path).exists():
        logger.error("Rules file %s not found.", rules_path)
        sys.exit(1)

    rules = load_rules(Path(rules_path))
    return ServiceContext.create(db_path, rules)


def handle_migrate(args: argparse.Namespace) -> None:
    Path(args.db).parent.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(args.db, args.migrations).run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_seed(ctx: ServiceContext, args: argparse.Namespace) -> None:
    courses, products = seed_catalog(ctx.course_repo, ctx.product_repo, args.count)
    print(f"Seeded {courses} courses and {products} products.")


def handle_list(ctx: ServiceContext, args: argparse.Namespace) -> None:
    service = ctx.course_service if args.table == "courses" else ctx.product_service
    output = run_list_page(
        ListPageInput(
            page=args.page,
            limit=args.limit or ctx.rules.grid.default_page_size,
            search=args.search,
            sort_by=args.sort_by,
            sort_order=SortOrder.parse(args.sort_order),
        ),
        service,
    )
    if not output.success or output.result is None:
        for error in output.errors:
            logger.error(error.message)
        sys.exit(2)

    label_field = service.config.search_field
    for record in output.result.records:
        print(f"{record.id:>5}  {getattr(record, label_field)}")

    info = output.result.pagination
    if info.total_pages > 0:
        pages = " ".join(
            f"[{t}]" if t == info.page else str(t)
            for t in generate_page_tokens(info.page, info.total_pages)
        )
        print(f"Page {info.page} of {info.total_pages} ({info.total_count} total)  {pages}")
    else:
        print(ctx.rules.grid.messages.empty)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Atelier catalog CLI")
    parser.add_argument("--db", default=DB_PATH, help="SQLite database path")
    parser.add_argument("--rules", default=RULES_PATH, help="Rules file path")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Apply pending migrations")
    migrate_parser.add_argument("--migrations", default=MIGRATIONS_DIR)

    # seed
    seed_parser = subparsers.add_parser("seed", help="Insert sample courses and products")
    seed_parser.add_argument("--count", type=int, default=24)

    # list
    list_parser = subparsers.add_parser("list", help="Print one page of a catalog table")
    list_parser.add_argument("table", choices=["courses", "products"])
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--limit", type=int, default=None)
    list_parser.add_argument("--search", default="")
    list_parser.add_argument("--sort-by", default="")
    list_parser.add_argument("--sort-order", default="DESC")

    args = parser.parse_args(argv)

    if args.command == "migrate":
        handle_migrate(args)
        return

    ctx = get_context(args.db, args.rules)

    if args.command == "seed":
        handle_seed(ctx, args)
    elif args.command == "list":
        handle_list(ctx, args)


if __name__ == "__main__":
    main()
