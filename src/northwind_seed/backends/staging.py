"""Staging backend - in-memory backend for testing without database."""

from typing import Any

from northwind_seed.backends.base import Mode, Query, SeedBackend
from northwind_seed.exceptions import BackendRejectedError
from northwind_seed.models import TableInfo


class StagingBackend(SeedBackend):
    """
    In-memory backend for seeding without a database.

    Simulates database behavior:
    - Stores inserted rows per table
    - Rejects duplicate primary keys, like a PRIMARY KEY constraint
    - Records every bulk insert and migration statement for inspection

    Use case: Fast unit tests, dry runs, prototyping generators.
    """

    target = "staging"

    def __init__(self):
        """Initialize staging backend with empty state."""
        self._data: dict[str, list[dict[str, Any]]] = {}
        self._pks: dict[str, set[Any]] = {}
        self.insert_calls: list[tuple[str, int]] = []
        self.statements: list[str] = []
        self.migrations: list[str] = []

    def execute_statement(
        self, sql: str, params: list[Any], mode: Mode = "run"
    ) -> list[Any]:
        self.statements.append(sql)
        return []

    def execute_batch(self, queries: list[Query]) -> list[list[Any]]:
        return [self.execute_statement(q.sql, q.params, q.mode) for q in queries]

    def run_migrations(self, statements: list[str]) -> None:
        self.migrations.extend(statements)

    def insert_rows(self, table_info: TableInfo, rows: list[dict[str, Any]]) -> int:
        """
        Store rows in memory.

        Raises:
            BackendRejectedError: If a row repeats a primary key
        """
        if not rows:
            return 0

        table_name = table_info.name
        pk = table_info.pk_column
        seen = self._pks.setdefault(table_name, set())

        if pk is not None:
            batch_pks = [row.get(pk) for row in rows]
            duplicates = seen.intersection(batch_pks)
            if duplicates or len(set(batch_pks)) != len(batch_pks):
                raise BackendRejectedError(
                    self.target,
                    f"UNIQUE constraint failed: {table_name}.{pk} "
                    f"({sorted(duplicates) or 'repeated within batch'})",
                )
            seen.update(batch_pks)

        sql, _ = self.build_insert(table_info, rows)
        self.statements.append(sql)
        self.insert_calls.append((table_name, len(rows)))
        self._data.setdefault(table_name, []).extend(dict(row) for row in rows)
        return len(rows)

    def get_data(self, table_name: str) -> list[dict[str, Any]]:
        """
        Get in-memory data for inspection.

        Args:
            table_name: Table name

        Returns:
            List of row dicts for the table
        """
        return self._data.get(table_name, [])

    def clear(self):
        """Clear all in-memory data and recorded statements."""
        self._data.clear()
        self._pks.clear()
        self.insert_calls.clear()
        self.statements.clear()
        self.migrations.clear()
