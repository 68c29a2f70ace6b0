"""Persistence backend contract shared by all backends."""

from abc import ABC, abstractmethod
from typing import Any, Literal, NamedTuple

from northwind_seed.models import TableInfo

Mode = Literal["run", "all", "values", "get"]


class Query(NamedTuple):
    """One statement of a batch."""

    sql: str
    params: list[Any]
    mode: Mode = "run"


class SeedBackend(ABC):
    """
    Abstract persistence backend.

    Implementations execute SQL and report failures as
    BackendUnavailableError (transient, retryable) or BackendRejectedError
    (permanent). They never return an empty result in place of an error.
    """

    #: Parameter placeholder used in generated statements
    placeholder = "?"

    #: Human-readable location used in error messages and logs
    target = "backend"

    @abstractmethod
    def execute_statement(
        self, sql: str, params: list[Any], mode: Mode = "run"
    ) -> list[Any]:
        """
        Execute one statement.

        Args:
            sql: SQL text using this backend's placeholder style
            params: Positional parameters
            mode: "run" (no rows), "all"/"values" (every row), "get" (first row)

        Returns:
            Result rows (empty for "run")
        """

    @abstractmethod
    def execute_batch(self, queries: list[Query]) -> list[list[Any]]:
        """Execute several statements in order, returning one result per query."""

    @abstractmethod
    def run_migrations(self, statements: list[str]) -> None:
        """Apply DDL statements in order."""

    def build_insert(
        self, table_info: TableInfo, rows: list[dict[str, Any]]
    ) -> tuple[str, list[Any]]:
        """
        Build one multi-row INSERT for rows of a table.

        Returns:
            (sql, flattened params) with params ordered row by row, column by column
        """
        columns = table_info.column_names
        columns_list = ", ".join(f'"{col}"' for col in columns)
        single_placeholder = f"({', '.join([self.placeholder] * len(columns))})"
        placeholders = ", ".join([single_placeholder] * len(rows))

        sql = f'INSERT INTO "{table_info.name}" ({columns_list}) VALUES {placeholders}'

        # Flatten values: [row1_col1, row1_col2, row2_col1, row2_col2, ...]
        params = [row.get(col) for row in rows for col in columns]
        return sql, params

    def insert_rows(self, table_info: TableInfo, rows: list[dict[str, Any]]) -> int:
        """
        Insert rows as a single bulk statement.

        Returns:
            Number of rows sent
        """
        if not rows:
            return 0
        sql, params = self.build_insert(table_info, rows)
        self.execute_statement(sql, params, "run")
        return len(rows)

    def close(self) -> None:
        """Release backend resources."""
