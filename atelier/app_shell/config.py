import logging
import os
import sys
from pathlib import Path

from atelier.components.catalog import TableConfig
from atelier.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.

    Exits the process when a required environment variable is missing or
    the data directory cannot be used.
    """
    ops = rules.ops

    if ops.data_dir_required:
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.critical("Data directory %s is not usable: %s", data_dir, e)
            sys.exit(1)
        if not os.access(data_dir, os.W_OK):
            logger.critical("Data directory %s is not writable", data_dir)
            sys.exit(1)

    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    logger.info("Configuration validated")


def table_config(table: str, rules: Rules) -> TableConfig:
    """Build the catalog configuration for one table from the rules."""
    table_rules = getattr(rules.catalog, table)
    return TableConfig(
        table=table,
        search_field=table_rules.search_field,
        sortable=tuple(table_rules.sortable),
        default_order_by=table_rules.default_order_by,
        default_order=table_rules.default_order,
        filterable=tuple(table_rules.filterable),
    )
