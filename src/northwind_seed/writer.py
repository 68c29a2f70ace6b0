"""Batched writer that buffers rows per table and bulk-inserts them."""

import logging
from collections import defaultdict
from typing import Any

from northwind_seed.backends.base import SeedBackend
from northwind_seed.retry import RetryPolicy
from northwind_seed.schema import get_table_info

logger = logging.getLogger(__name__)

# Buffers are flushed once they hold more than this many rows
DEFAULT_BATCH_SIZE = 5


class BatchWriter:
    """
    Buffer generated rows per table and flush them as bulk inserts.

    A buffer is flushed automatically as soon as it holds more than
    ``batch_size`` rows. Flushes are synchronous, so at most
    ``batch_size + 1`` rows per table are held in memory.

    Usage:
        with BatchWriter(backend) as writer:
            for row in rows:
                writer.add("customers", row)
        # remaining buffers flushed on clean exit
    """

    def __init__(
        self,
        backend: SeedBackend,
        batch_size: int = DEFAULT_BATCH_SIZE,
        retry_policy: RetryPolicy | None = None,
    ):
        """
        Initialize writer.

        Args:
            backend: Persistence backend receiving bulk inserts
            batch_size: Flush threshold (flush when buffer exceeds it)
            retry_policy: Retry policy for transient backend failures
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.backend = backend
        self.batch_size = batch_size
        self.retry_policy = retry_policy or RetryPolicy()
        self._buffers: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.flush_count: dict[str, int] = defaultdict(int)
        self.rows_written: dict[str, int] = defaultdict(int)

    def add(self, table: str, row: dict[str, Any]) -> None:
        """Buffer a row, flushing the table if its buffer exceeds the threshold."""
        buffer = self._buffers[table]
        buffer.append(row)
        if len(buffer) > self.batch_size:
            self.flush(table)

    def flush(self, table: str) -> int:
        """
        Send a table's buffered rows as one bulk insert.

        The buffer is cleared only after the backend accepted the rows; on
        failure the exception propagates and the rows stay buffered.

        Returns:
            Number of rows written (0 if the buffer was empty)
        """
        rows = self._buffers.get(table)
        if not rows:
            return 0

        table_info = get_table_info(table)
        written = self.retry_policy.call(
            lambda: self.backend.insert_rows(table_info, rows),
            description=f"insert {len(rows)} rows into {table}",
        )
        logger.debug(f"flushed {written} rows into {table}")

        self._buffers[table] = []
        self.flush_count[table] += 1
        self.rows_written[table] += written
        return written

    def flush_all(self) -> int:
        """Flush every non-empty buffer."""
        return sum(self.flush(table) for table in list(self._buffers))

    def pending(self, table: str) -> int:
        """Number of rows buffered for a table."""
        return len(self._buffers.get(table, []))

    def __enter__(self) -> "BatchWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush_all()
