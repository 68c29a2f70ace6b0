"""HTTP backend for a sqlite-proxy server (e.g. a Turso/libSQL proxy)."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import requests

from northwind_seed.backends.base import Mode, Query, SeedBackend
from northwind_seed.exceptions import (
    BackendOutcomeUnknownError,
    BackendRejectedError,
    BackendUnavailableError,
)

logger = logging.getLogger(__name__)

# Status codes worth retrying: timeouts, rate limiting and server errors
TRANSIENT_STATUS = {408, 429}


def to_wire(value: Any) -> Any:
    """Convert a parameter to a JSON-compatible value."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return value


class HttpProxyBackend(SeedBackend):
    """
    Send statements to a sqlite-proxy server over HTTP.

    Endpoints (all POST, JSON bodies, bearer-token auth):
        /query    {"sql", "params", "method"} -> rows
        /batch    {"queries": [{"sql", "params", "method"}, ...]} -> [rows, ...]
        /migrate  {"queries": [sql, ...]}
    """

    placeholder = "?"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        """
        Initialize backend.

        Args:
            url: Proxy base URL (TURSO_URL)
            token: Bearer token (TURSO_TOKEN)
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.url = url.rstrip("/")
        self.target = self.url
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def execute_statement(
        self, sql: str, params: list[Any], mode: Mode = "run"
    ) -> list[Any]:
        data = self._post(
            "query",
            {"sql": sql, "params": [to_wire(p) for p in params], "method": mode},
            sql=sql,
        )
        return self._rows(data, sql)

    def execute_batch(self, queries: list[Query]) -> list[list[Any]]:
        payload = {
            "queries": [
                {"sql": q.sql, "params": [to_wire(p) for p in q.params], "method": q.mode}
                for q in queries
            ]
        }
        data = self._post("batch", payload)
        if not isinstance(data, list) or len(data) != len(queries):
            raise BackendRejectedError(
                self.target, f"batch returned {type(data).__name__}, expected {len(queries)} results"
            )
        return [self._rows(item, q.sql) for item, q in zip(data, queries)]

    def run_migrations(self, statements: list[str]) -> None:
        self._post("migrate", {"queries": statements})
        logger.info("migrate: good")

    def close(self) -> None:
        self.session.close()

    def _post(self, endpoint: str, payload: dict[str, Any], sql: str | None = None) -> Any:
        """
        POST a JSON payload and decode the JSON response.

        Raises:
            BackendUnavailableError: Connection failure or connect timeout
                (request never delivered), 408/429 or 5xx
            BackendOutcomeUnknownError: Read timeout (request delivered, may
                have been applied)
            BackendRejectedError: Any other 4xx, or a non-JSON response
        """
        url = f"{self.url}/{endpoint}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.ConnectionError as e:
            # ConnectTimeout is a ConnectionError
            raise BackendUnavailableError(url, str(e)) from e
        except requests.Timeout as e:
            raise BackendOutcomeUnknownError(url, str(e), sql) from e
        except requests.RequestException as e:
            raise BackendRejectedError(url, str(e), sql) from e

        if response.status_code >= 500 or response.status_code in TRANSIENT_STATUS:
            raise BackendUnavailableError(
                url, f"HTTP {response.status_code}: {_error_message(response)}"
            )
        if response.status_code >= 400:
            raise BackendRejectedError(
                url, f"HTTP {response.status_code}: {_error_message(response)}", sql
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendRejectedError(url, "response is not valid JSON", sql) from e

    def _rows(self, data: Any, sql: str) -> list[Any]:
        """Extract rows from a proxy response ({"rows": [...]}, a bare list, or null)."""
        if data is None:
            return []
        if isinstance(data, dict):
            if "error" in data:
                raise BackendRejectedError(self.target, str(data["error"]), sql)
            data = data.get("rows", [])
        if not isinstance(data, list):
            return [data]
        return data


def _error_message(response: requests.Response) -> str:
    """Best-effort error text: JSON "message"/"error" field, else body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
