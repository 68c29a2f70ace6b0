"""Integration tests for DirectBackend (require NORTHWIND_TEST_DATABASE_URL)."""

from decimal import Decimal

import pytest

from northwind_seed import RandomSource, SeedOrchestrator
from northwind_seed.backends import DirectBackend
from northwind_seed.exceptions import BackendRejectedError, BackendUnavailableError
from northwind_seed.migrations import schema_statements
from northwind_seed.schema import TABLES

pytestmark = pytest.mark.postgres


def count_rows(backend: DirectBackend, table: str) -> int:
    rows = backend.execute_statement(f'SELECT COUNT(*) FROM "{table}"', [], "get")
    return rows[0][0]


def test_migrations_create_schema(pg_backend):
    pg_backend.run_migrations(schema_statements())

    for table in TABLES:
        assert count_rows(pg_backend, table) == 0


def test_migrations_are_idempotent(pg_backend):
    pg_backend.run_migrations(schema_statements())
    pg_backend.run_migrations(schema_statements())


def test_insert_rows_uses_percent_placeholders(pg_backend):
    pg_backend.run_migrations(schema_statements())
    rows = [
        {"id": 1, "company_name": "Speedy Express", "phone": "(503) 555-9831"},
        {"id": 2, "company_name": None, "phone": None},
    ]

    assert pg_backend.insert_rows(TABLES["shippers"], rows) == 2
    assert count_rows(pg_backend, "shippers") == 2


def test_duplicate_id_rejected_and_rolled_back(pg_backend):
    pg_backend.run_migrations(schema_statements())
    row = {"id": 1, "company_name": "Speedy Express", "phone": None}
    pg_backend.insert_rows(TABLES["shippers"], [row])

    with pytest.raises(BackendRejectedError) as exc_info:
        pg_backend.insert_rows(TABLES["shippers"], [row])

    assert exc_info.value.sql.startswith('INSERT INTO "shippers"')
    # Connection is usable after the rollback
    assert count_rows(pg_backend, "shippers") == 1


def test_orchestrator_round_trip(pg_backend, small_profile):
    summary = SeedOrchestrator(
        pg_backend,
        small_profile,
        random_source=RandomSource(seed=11),
        migrations=schema_statements(),
    ).run()

    for table, rows in summary.rows.items():
        assert count_rows(pg_backend, table) == rows

    prices = pg_backend.execute_statement(
        'SELECT unit_price FROM "products" ORDER BY id', [], "all"
    )
    assert all(isinstance(price, Decimal) for (price,) in prices)


def test_unreachable_server():
    with pytest.raises(BackendUnavailableError):
        DirectBackend.connect("postgresql://nobody@127.0.0.1:1/northwind?connect_timeout=1")
