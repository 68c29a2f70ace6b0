"""Tests for BatchWriter."""

import pytest

from northwind_seed import BatchWriter, RetryPolicy, StagingBackend
from northwind_seed.exceptions import BackendRejectedError, BackendUnavailableError


def supplier(record_id: int) -> dict:
    return {"id": record_id, "company_name": f"Supplier {record_id}"}


class FlakyBackend(StagingBackend):
    """Staging backend whose first inserts fail with a given error."""

    def __init__(self, failures: int, error: Exception):
        super().__init__()
        self.failures = failures
        self.error = error
        self.attempts = 0

    def insert_rows(self, table_info, rows):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise self.error
        return super().insert_rows(table_info, rows)


class TestThreshold:
    """Flushing happens when a buffer exceeds the batch size."""

    def test_six_rows_flush_once(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend, batch_size=5)

        for i in range(1, 7):
            writer.add("suppliers", supplier(i))

        assert staging_backend.insert_calls == [("suppliers", 6)]
        assert writer.pending("suppliers") == 0
        assert writer.flush_count["suppliers"] == 1

    def test_five_rows_wait_for_flush_all(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend, batch_size=5)

        for i in range(1, 6):
            writer.add("suppliers", supplier(i))

        assert staging_backend.insert_calls == []
        assert writer.pending("suppliers") == 5

        assert writer.flush_all() == 5
        assert staging_backend.insert_calls == [("suppliers", 5)]

    def test_remainder_stays_buffered(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend, batch_size=5)

        for i in range(1, 14):
            writer.add("suppliers", supplier(i))

        assert staging_backend.insert_calls == [("suppliers", 6), ("suppliers", 6)]
        assert writer.pending("suppliers") == 1
        assert writer.rows_written["suppliers"] == 12

    def test_buffers_are_per_table(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend, batch_size=1)

        writer.add("suppliers", supplier(1))
        writer.add("shippers", {"id": 1, "company_name": "x", "phone": "1"})

        assert staging_backend.insert_calls == []
        assert writer.pending("suppliers") == 1
        assert writer.pending("shippers") == 1

    def test_flush_empty_buffer_is_noop(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend)

        assert writer.flush("suppliers") == 0
        assert staging_backend.insert_calls == []
        assert writer.flush_count["suppliers"] == 0

    def test_invalid_batch_size(self, staging_backend: StagingBackend) -> None:
        with pytest.raises(ValueError, match="batch_size"):
            BatchWriter(staging_backend, batch_size=0)


class TestContextManager:
    def test_flushes_on_clean_exit(self, staging_backend: StagingBackend) -> None:
        with BatchWriter(staging_backend) as writer:
            writer.add("suppliers", supplier(1))

        assert staging_backend.insert_calls == [("suppliers", 1)]

    def test_no_flush_when_body_raises(self, staging_backend: StagingBackend) -> None:
        with pytest.raises(RuntimeError):
            with BatchWriter(staging_backend) as writer:
                writer.add("suppliers", supplier(1))
                raise RuntimeError("generation failed")

        assert staging_backend.insert_calls == []


class TestFailures:
    """Retry and buffer behavior when the backend fails."""

    def test_transient_failure_retried(self, no_sleep_retry: RetryPolicy) -> None:
        backend = FlakyBackend(2, BackendUnavailableError("proxy", "connection reset"))
        writer = BatchWriter(backend, batch_size=5, retry_policy=no_sleep_retry)

        for i in range(1, 7):
            writer.add("suppliers", supplier(i))

        assert backend.attempts == 3
        assert backend.insert_calls == [("suppliers", 6)]
        assert writer.pending("suppliers") == 0
        assert no_sleep_retry.delays == [0.5, 1.0]

    def test_rejected_not_retried(self, no_sleep_retry: RetryPolicy) -> None:
        backend = FlakyBackend(1, BackendRejectedError("proxy", "no such table"))
        writer = BatchWriter(backend, batch_size=5, retry_policy=no_sleep_retry)
        for i in range(1, 6):
            writer.add("suppliers", supplier(i))

        with pytest.raises(BackendRejectedError):
            writer.flush("suppliers")

        assert backend.attempts == 1
        assert no_sleep_retry.delays == []

    def test_buffer_kept_after_failure(self, no_sleep_retry: RetryPolicy) -> None:
        backend = FlakyBackend(10, BackendUnavailableError("proxy", "down"))
        writer = BatchWriter(backend, batch_size=5, retry_policy=no_sleep_retry)
        for i in range(1, 4):
            writer.add("suppliers", supplier(i))

        with pytest.raises(BackendUnavailableError):
            writer.flush("suppliers")

        assert backend.attempts == 4
        assert writer.pending("suppliers") == 3
        assert writer.flush_count["suppliers"] == 0
        assert writer.rows_written["suppliers"] == 0

    def test_duplicate_ids_rejected(self, staging_backend: StagingBackend) -> None:
        writer = BatchWriter(staging_backend, batch_size=5)
        writer.add("suppliers", supplier(1))
        writer.flush("suppliers")
        writer.add("suppliers", supplier(1))

        with pytest.raises(BackendRejectedError, match="UNIQUE"):
            writer.flush("suppliers")
