"""Pytest configuration and shared fixtures."""

import os

import pytest

from northwind_seed import (
    RandomSource,
    ReferenceRegistry,
    RetryPolicy,
    SizeProfile,
    StagingBackend,
    clear_generators,
)
from northwind_seed.generators import GenerationContext
from northwind_seed.schema import TABLES


@pytest.fixture(autouse=True)
def reset_generators():
    """Restore the default generators after every test."""
    yield
    clear_generators()


@pytest.fixture
def random_source() -> RandomSource:
    """Seeded random source so every test run draws the same values."""
    return RandomSource(seed=1234)


@pytest.fixture
def registry() -> ReferenceRegistry:
    return ReferenceRegistry()


@pytest.fixture
def small_profile() -> SizeProfile:
    return SizeProfile(
        employees=5,
        customers=8,
        orders=20,
        products=15,
        suppliers=4,
        shippers=6,
    )


@pytest.fixture
def context(random_source, registry, small_profile) -> GenerationContext:
    return GenerationContext(
        random=random_source,
        registry=registry,
        profile=small_profile,
    )


@pytest.fixture
def staging_backend() -> StagingBackend:
    return StagingBackend()


@pytest.fixture
def no_sleep_retry() -> RetryPolicy:
    """Retry policy that records delays instead of sleeping."""
    delays: list[float] = []
    policy = RetryPolicy(max_retries=3, retry_delay=0.5, jitter=False, sleep=delays.append)
    policy.delays = delays
    return policy


@pytest.fixture
def pg_backend():
    """
    Provide a DirectBackend on a scratch PostgreSQL database.

    Skipped unless NORTHWIND_TEST_DATABASE_URL is set. Northwind tables are
    dropped before and after the test.
    """
    url = os.getenv("NORTHWIND_TEST_DATABASE_URL")
    if not url:
        pytest.skip("NORTHWIND_TEST_DATABASE_URL not set")

    from northwind_seed.backends import DirectBackend

    backend = DirectBackend.connect(url)

    def drop_tables():
        for table in TABLES:
            backend.execute_statement(f'DROP TABLE IF EXISTS "{table}" CASCADE', [])

    drop_tables()
    yield backend

    drop_tables()
    backend.close()
