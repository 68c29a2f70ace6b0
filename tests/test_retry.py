"""Tests for RetryPolicy."""

import pytest

from northwind_seed import RetryPolicy
from northwind_seed.exceptions import BackendRejectedError, BackendUnavailableError


def failing(times: int, error: Exception):
    """Return a callable that raises ``error`` ``times`` times, then returns "ok"."""
    calls = []

    def fn():
        calls.append(1)
        if len(calls) <= times:
            raise error
        return "ok"

    fn.calls = calls
    return fn


def test_delays_grow_exponentially():
    policy = RetryPolicy(retry_delay=0.5, backoff_factor=2.0)

    assert [policy.delay_for(n) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]


def test_success_after_transient_failures(no_sleep_retry: RetryPolicy):
    fn = failing(3, BackendUnavailableError("proxy", "timeout"))

    assert no_sleep_retry.call(fn) == "ok"
    assert len(fn.calls) == 4
    assert no_sleep_retry.delays == [0.5, 1.0, 2.0]


def test_gives_up_after_max_retries(no_sleep_retry: RetryPolicy):
    fn = failing(10, BackendUnavailableError("proxy", "timeout"))

    with pytest.raises(BackendUnavailableError):
        no_sleep_retry.call(fn)

    assert len(fn.calls) == 4


def test_rejected_propagates_immediately(no_sleep_retry: RetryPolicy):
    fn = failing(1, BackendRejectedError("proxy", "syntax error"))

    with pytest.raises(BackendRejectedError):
        no_sleep_retry.call(fn)

    assert len(fn.calls) == 1


def test_zero_retries_single_attempt():
    sleeps = []
    policy = RetryPolicy(max_retries=0, sleep=sleeps.append)
    fn = failing(1, BackendUnavailableError("proxy", "down"))

    with pytest.raises(BackendUnavailableError):
        policy.call(fn)

    assert len(fn.calls) == 1
    assert sleeps == []


def test_jitter_stays_within_bounds():
    sleeps = []
    policy = RetryPolicy(max_retries=1, retry_delay=1.0, jitter=True, sleep=sleeps.append)

    policy.call(failing(1, BackendUnavailableError("proxy", "down")))

    assert len(sleeps) == 1
    assert 0.8 <= sleeps[0] < 1.2
