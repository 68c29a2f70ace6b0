"""Direct PostgreSQL backend - executes statements over a psycopg connection."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg import Connection

from northwind_seed.backends.base import Mode, Query, SeedBackend
from northwind_seed.exceptions import BackendRejectedError, BackendUnavailableError

logger = logging.getLogger(__name__)


class DirectBackend(SeedBackend):
    """
    Execute seed statements directly against PostgreSQL.

    Every call runs in its own transaction and is committed before
    returning. Connection-level failures (psycopg.OperationalError) are
    reported as BackendUnavailableError; every other database error is a
    BackendRejectedError.

    A connection left closed or broken by a failure is reopened from
    ``conninfo`` at the start of the next call, so a retried call runs on a
    fresh connection.
    """

    placeholder = "%s"

    def __init__(self, conn: Connection, conninfo: str | None = None):
        """
        Initialize backend.

        Args:
            conn: PostgreSQL connection (autocommit off)
            conninfo: Connection string used to reconnect (None = no reconnect)
        """
        self.conn = conn
        self.conninfo = conninfo
        info = conn.info
        self.target = f"postgresql://{info.host}:{info.port}/{info.dbname}"

    @classmethod
    def connect(cls, database_url: str) -> "DirectBackend":
        """
        Open a connection and wrap it.

        Raises:
            BackendUnavailableError: If the server cannot be reached
        """
        try:
            conn = psycopg.connect(database_url, autocommit=False)
        except psycopg.OperationalError as e:
            raise BackendUnavailableError(database_url, str(e)) from e
        return cls(conn, conninfo=database_url)

    def execute_statement(
        self, sql: str, params: list[Any], mode: Mode = "run"
    ) -> list[Any]:
        with self._transaction(sql):
            return self._execute(sql, params, mode)

    def execute_batch(self, queries: list[Query]) -> list[list[Any]]:
        with self._transaction(queries[0].sql if queries else None):
            return [self._execute(q.sql, q.params, q.mode) for q in queries]

    def run_migrations(self, statements: list[str]) -> None:
        with self._transaction(None):
            with self.conn.cursor() as cur:
                for statement in statements:
                    logger.debug(f"migrate: {statement.splitlines()[0]}")
                    cur.execute(statement)

    def close(self) -> None:
        self.conn.close()

    def _execute(self, sql: str, params: list[Any], mode: Mode) -> list[Any]:
        with self.conn.cursor() as cur:
            cur.execute(sql, params)
            if cur.description is None or mode == "run":
                return []
            if mode == "get":
                row = cur.fetchone()
                return [row] if row is not None else []
            return cur.fetchall()

    def _ensure_connection(self) -> None:
        """
        Reopen the connection if a previous failure left it closed or broken.

        Raises:
            BackendUnavailableError: If there is no conninfo or the server is unreachable
        """
        if not (self.conn.closed or self.conn.broken):
            return
        if self.conninfo is None:
            raise BackendUnavailableError(
                self.target, "connection lost and no conninfo to reconnect with"
            )

        logger.warning(f"connection to {self.target} lost, reconnecting...")
        self.conn.close()
        try:
            self.conn = psycopg.connect(self.conninfo, autocommit=False)
        except psycopg.OperationalError as e:
            raise BackendUnavailableError(self.target, str(e)) from e

    @contextmanager
    def _transaction(self, sql: str | None) -> Iterator[None]:
        """Commit on success; roll back and translate psycopg errors on failure."""
        self._ensure_connection()
        try:
            yield
            self.conn.commit()
        except psycopg.OperationalError as e:
            if not (self.conn.closed or self.conn.broken):
                self.conn.rollback()
            raise BackendUnavailableError(self.target, str(e)) from e
        except psycopg.Error as e:
            self.conn.rollback()
            raise BackendRejectedError(self.target, str(e), sql) from e
