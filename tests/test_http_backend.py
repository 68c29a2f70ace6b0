"""Tests for HttpProxyBackend with a patched requests session."""

import json
from decimal import Decimal

import pytest
import requests

from northwind_seed import BatchWriter, RetryPolicy
from northwind_seed.backends import HttpProxyBackend
from northwind_seed.backends.base import Query
from northwind_seed.exceptions import (
    BackendOutcomeUnknownError,
    BackendRejectedError,
    BackendUnavailableError,
)
from northwind_seed.schema import TABLES


def make_response(status_code: int = 200, body=None, text: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if text is not None:
        response._content = text.encode()
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    return response


@pytest.fixture
def posts(monkeypatch):
    """Record every POST and reply with queued responses (default: empty 200)."""
    calls = []
    replies = []

    def fake_post(session, url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout, "headers": dict(session.headers)})
        reply = replies.pop(0) if replies else make_response()
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(requests.Session, "post", fake_post)
    return calls, replies


@pytest.fixture
def backend() -> HttpProxyBackend:
    return HttpProxyBackend("http://proxy.local/", token="secret", timeout=5.0)


class TestRequests:
    def test_execute_statement_payload(self, backend, posts) -> None:
        calls, replies = posts
        replies.append(make_response(body={"rows": [[1, "Alfreds"]]}))

        rows = backend.execute_statement(
            'SELECT * FROM "customers" WHERE id = ?', [1], "all"
        )

        assert rows == [[1, "Alfreds"]]
        assert calls[0]["url"] == "http://proxy.local/query"
        assert calls[0]["json"] == {
            "sql": 'SELECT * FROM "customers" WHERE id = ?',
            "params": [1],
            "method": "all",
        }
        assert calls[0]["timeout"] == 5.0
        assert calls[0]["headers"]["Authorization"] == "Bearer secret"

    def test_no_token_no_auth_header(self, posts) -> None:
        calls, _ = posts

        HttpProxyBackend("http://proxy.local").execute_statement("SELECT 1", [])

        assert "Authorization" not in calls[0]["headers"]

    def test_insert_rows_sends_one_statement(self, backend, posts) -> None:
        calls, _ = posts
        rows = [
            {"id": 1, "company_name": "Speedy Express", "phone": "(503) 555-9831"},
            {"id": 2, "company_name": "United Package", "phone": None},
        ]

        assert backend.insert_rows(TABLES["shippers"], rows) == 2

        payload = calls[0]["json"]
        assert payload["sql"] == (
            'INSERT INTO "shippers" ("id", "company_name", "phone") '
            "VALUES (?, ?, ?), (?, ?, ?)"
        )
        assert payload["params"] == [
            1, "Speedy Express", "(503) 555-9831", 2, "United Package", None,
        ]
        assert payload["method"] == "run"

    def test_decimals_sent_as_numbers(self, backend, posts) -> None:
        calls, _ = posts

        backend.execute_statement("SELECT ?", [Decimal("18.05")])

        assert calls[0]["json"]["params"] == [18.05]

    def test_execute_batch(self, backend, posts) -> None:
        calls, replies = posts
        replies.append(make_response(body=[[], {"rows": [[3]]}]))

        results = backend.execute_batch(
            [Query("DELETE FROM a", []), Query("SELECT count(*) FROM b", [], "get")]
        )

        assert results == [[], [[3]]]
        assert calls[0]["url"] == "http://proxy.local/batch"
        assert calls[0]["json"]["queries"][1] == {
            "sql": "SELECT count(*) FROM b",
            "params": [],
            "method": "get",
        }

    def test_run_migrations(self, backend, posts) -> None:
        calls, _ = posts

        backend.run_migrations(["CREATE TABLE a (id INTEGER)"])

        assert calls[0]["url"] == "http://proxy.local/migrate"
        assert calls[0]["json"] == {"queries": ["CREATE TABLE a (id INTEGER)"]}


class TestErrors:
    @pytest.mark.parametrize("status", [500, 502, 503, 408, 429])
    def test_transient_status(self, backend, posts, status) -> None:
        _, replies = posts
        replies.append(make_response(status, body={"error": "busy"}))

        with pytest.raises(BackendUnavailableError, match=f"HTTP {status}: busy"):
            backend.execute_statement("SELECT 1", [])

    @pytest.mark.parametrize("status", [400, 401, 404])
    def test_client_error_rejected(self, backend, posts, status) -> None:
        _, replies = posts
        replies.append(make_response(status, body={"message": "no such table: orders"}))

        with pytest.raises(BackendRejectedError, match="no such table: orders") as exc_info:
            backend.execute_statement("SELECT * FROM orders", [])

        assert exc_info.value.sql == "SELECT * FROM orders"

    def test_connection_error_unavailable(self, backend, posts) -> None:
        _, replies = posts
        replies.append(requests.ConnectionError("connection refused"))

        with pytest.raises(BackendUnavailableError, match="connection refused"):
            backend.run_migrations(["SELECT 1"])

    def test_connect_timeout_unavailable(self, backend, posts) -> None:
        """Test a request that never reached the proxy is retryable."""
        _, replies = posts
        replies.append(requests.ConnectTimeout("connect timed out"))

        with pytest.raises(BackendUnavailableError):
            backend.execute_statement("SELECT 1", [])

    def test_read_timeout_outcome_unknown(self, backend, posts) -> None:
        """Test a request sent without a response is not reported as retryable."""
        _, replies = posts
        replies.append(requests.ReadTimeout("read timed out"))

        with pytest.raises(BackendOutcomeUnknownError) as exc_info:
            backend.execute_statement("INSERT INTO a VALUES (?)", [1])

        assert not isinstance(exc_info.value, BackendUnavailableError)
        assert exc_info.value.sql == "INSERT INTO a VALUES (?)"

    def test_error_field_in_body_rejected(self, backend, posts) -> None:
        _, replies = posts
        replies.append(make_response(body={"error": "UNIQUE constraint failed: customers.id"}))

        with pytest.raises(BackendRejectedError, match="UNIQUE constraint failed"):
            backend.execute_statement("INSERT ...", [])

    def test_invalid_json_rejected(self, backend, posts) -> None:
        _, replies = posts
        replies.append(make_response(text="<html>oops</html>"))

        with pytest.raises(BackendRejectedError, match="not valid JSON"):
            backend.execute_statement("SELECT 1", [])

    def test_batch_result_length_mismatch(self, backend, posts) -> None:
        _, replies = posts
        replies.append(make_response(body=[[]]))

        with pytest.raises(BackendRejectedError):
            backend.execute_batch([Query("SELECT 1", []), Query("SELECT 2", [])])


class TestWriterRetries:
    """Retry behavior of flushes routed through the HTTP backend."""

    def test_read_timeout_after_commit_not_replayed(self, backend, monkeypatch) -> None:
        """Test an insert the proxy applied but never answered is sent only once."""
        stored_ids = []

        def committing_then_silent(session, url, json=None, timeout=None):
            params = json["params"]
            stored_ids.extend(params[0::3])
            raise requests.ReadTimeout("read timed out")

        monkeypatch.setattr(requests.Session, "post", committing_then_silent)
        sleeps = []
        writer = BatchWriter(backend, retry_policy=RetryPolicy(sleep=sleeps.append))
        for i in range(1, 4):
            writer.add("shippers", {"id": i, "company_name": f"Shipper {i}", "phone": None})

        with pytest.raises(BackendOutcomeUnknownError):
            writer.flush("shippers")

        assert stored_ids == [1, 2, 3]
        assert sleeps == []
        assert writer.pending("shippers") == 3

    def test_connect_timeout_retried_then_written(self, backend, posts) -> None:
        calls, replies = posts
        replies.append(requests.ConnectTimeout("connect timed out"))
        replies.append(make_response(body={"rows": []}))
        sleeps = []
        writer = BatchWriter(backend, retry_policy=RetryPolicy(jitter=False, sleep=sleeps.append))
        writer.add("shippers", {"id": 1, "company_name": "Speedy Express", "phone": None})

        assert writer.flush("shippers") == 1
        assert len(calls) == 2
        assert sleeps == [0.5]
        assert writer.pending("shippers") == 0
