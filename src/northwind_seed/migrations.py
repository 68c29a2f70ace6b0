"""Schema migrations: built-in DDL and SQL migration files.

Migration files are applied in file-name order. Statements inside a file are
separated by the ``--> statement-breakpoint`` marker (as emitted by
drizzle-kit) or, when no marker is present, by a trailing semicolon.
"""

import logging
import re
from pathlib import Path

from northwind_seed.backends.base import SeedBackend
from northwind_seed.dependency import DependencyGraph
from northwind_seed.exceptions import BackendError, MigrationFailedError
from northwind_seed.models import TableInfo
from northwind_seed.retry import RetryPolicy
from northwind_seed.schema import TABLES

logger = logging.getLogger(__name__)

STATEMENT_BREAKPOINT = "--> statement-breakpoint"
_SEMICOLON_SPLIT = re.compile(r";\s*(?:\n|$)")


def create_table_sql(table: TableInfo) -> str:
    """Build ``CREATE TABLE IF NOT EXISTS`` for a table definition."""
    lines = []
    for col in table.columns:
        line = f'    "{col.name}" {col.sql_type}'
        if col.is_primary_key:
            line += " PRIMARY KEY"
        elif not col.is_nullable:
            line += " NOT NULL"
        lines.append(line)

    for fk in table.foreign_keys:
        line = (
            f'    FOREIGN KEY ("{fk.column}") '
            f'REFERENCES "{fk.referenced_table}" ("{fk.referenced_column}")'
        )
        if not fk.is_self_referencing:
            line += " ON DELETE CASCADE"
        lines.append(line)

    body = ",\n".join(lines)
    return f'CREATE TABLE IF NOT EXISTS "{table.name}" (\n{body}\n)'


def schema_statements(tables: dict[str, TableInfo] | None = None) -> list[str]:
    """
    DDL for the Northwind schema, parents before children.

    Returns:
        CREATE TABLE statements followed by CREATE INDEX statements
    """
    tables = tables or TABLES
    order = DependencyGraph.from_tables(list(tables.values())).topological_sort()

    statements = [create_table_sql(tables[name]) for name in order]
    for name in order:
        for index in tables[name].indexes:
            statements.append(
                f'CREATE INDEX IF NOT EXISTS "{index.name}" '
                f'ON "{name}" ("{index.column}")'
            )
    return statements


def split_statements(content: str) -> list[str]:
    """Split a migration file into individual statements."""
    if STATEMENT_BREAKPOINT in content:
        parts = content.split(STATEMENT_BREAKPOINT)
    else:
        parts = _SEMICOLON_SPLIT.split(content)

    statements = []
    for part in parts:
        statement = part.strip().rstrip(";").strip()
        if statement:
            statements.append(statement)
    return statements


def load_migration_files(directory: str | Path) -> list[str]:
    """
    Read every ``*.sql`` file in a directory, in name order.

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Migrations directory not found: {directory}")

    statements = []
    for sql_file in sorted(directory.glob("*.sql")):
        file_statements = split_statements(sql_file.read_text())
        logger.debug(f"Loaded {len(file_statements)} statements from {sql_file.name}")
        statements.extend(file_statements)
    return statements


def apply_migrations(
    backend: SeedBackend,
    statements: list[str],
    retry_policy: RetryPolicy | None = None,
) -> None:
    """
    Apply migration statements through the backend.

    Transient failures are retried according to ``retry_policy``.

    Raises:
        MigrationFailedError: If the backend failed or rejected the migrations
    """
    if not statements:
        logger.info("migrate: nothing to apply")
        return

    policy = retry_policy or RetryPolicy()
    try:
        policy.call(lambda: backend.run_migrations(statements), description="migrate")
    except BackendError as e:
        raise MigrationFailedError(getattr(e, "detail", str(e))) from e
    logger.info(f"migrate: applied {len(statements)} statements")
