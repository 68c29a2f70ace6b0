"""Data models and type definitions."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


@dataclass
class ColumnInfo:
    """
    Column definition for a seeded table.

    Attributes:
        name: Column name
        sql_type: SQL type used in generated DDL
        is_nullable: Whether column allows NULL values
        is_primary_key: Whether column is primary key
    """

    name: str
    sql_type: str
    is_nullable: bool = False
    is_primary_key: bool = False


@dataclass
class ForeignKeyInfo:
    """
    Foreign key relationship metadata.

    Attributes:
        column: Foreign key column name in this table
        referenced_table: Parent table being referenced
        referenced_column: Column in parent table (usually PK)
        is_self_referencing: Whether this FK references the same table
    """

    column: str
    referenced_table: str
    referenced_column: str = "id"
    is_self_referencing: bool = False


@dataclass
class IndexInfo:
    """Secondary index on one column."""

    name: str
    column: str


@dataclass
class TableInfo:
    """
    Table metadata.

    Attributes:
        name: Table name
        columns: List of column definitions, in insert order
        foreign_keys: List of foreign key relationships
        indexes: Secondary indexes
    """

    name: str
    columns: list[ColumnInfo]
    foreign_keys: list[ForeignKeyInfo] = field(default_factory=list)
    indexes: list[IndexInfo] = field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        """Column names in declaration order."""
        return [col.name for col in self.columns]

    @property
    def pk_column(self) -> str | None:
        """
        Get primary key column name.

        Returns:
            Primary key column name or None if table has no PK
        """
        for col in self.columns:
            if col.is_primary_key:
                return col.name
        return None


class SizeProfile(BaseModel):
    """Target record counts for one seeding run."""

    employees: int = Field(ge=1)
    customers: int = Field(ge=1)
    orders: int = Field(ge=1)
    products: int = Field(ge=1)
    suppliers: int = Field(ge=1)
    shippers: int = Field(ge=1)

    def count_for(self, table: str) -> int | None:
        """
        Target count for a table.

        Returns:
            The configured count, or None for tables whose size is drawn
            per run (order_details)
        """
        return getattr(self, table, None)


@dataclass
class SeedSummary:
    """
    Outcome of a completed seeding run.

    Attributes:
        rows: Rows written per table
        flushes: Bulk-insert calls per table
        elapsed: Wall-clock seconds for the run
    """

    rows: dict[str, int] = field(default_factory=dict)
    flushes: dict[str, int] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def total_rows(self) -> int:
        return sum(self.rows.values())

    def as_dict(self) -> dict[str, Any]:
        return {
            "rows": dict(self.rows),
            "flushes": dict(self.flushes),
            "total_rows": self.total_rows,
            "elapsed": round(self.elapsed, 3),
        }
