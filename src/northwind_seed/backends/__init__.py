"""Backend implementations for seed data persistence."""

from northwind_seed.backends.base import Query, SeedBackend
from northwind_seed.backends.direct import DirectBackend
from northwind_seed.backends.http import HttpProxyBackend
from northwind_seed.backends.staging import StagingBackend

__all__ = [
    "Query",
    "SeedBackend",
    "DirectBackend",
    "HttpProxyBackend",
    "StagingBackend",
]
