"""
northwind-seed - Relationally consistent Northwind sample data

Generates customers, employees, orders, suppliers, products, order details
and shippers in foreign-key order and streams them to a persistence backend
in small bulk inserts.
"""

from northwind_seed.backends import (
    DirectBackend,
    HttpProxyBackend,
    SeedBackend,
    StagingBackend,
)
from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.registry import (
    clear_generators,
    list_generators,
    register_generator,
)
from northwind_seed.models import SeedSummary, SizeProfile
from northwind_seed.orchestrator import PHASES, SeedOrchestrator
from northwind_seed.profiles import SIZE_PROFILES, get_profile
from northwind_seed.registry import ReferenceRegistry
from northwind_seed.retry import RetryPolicy
from northwind_seed.sampling import Bucket, RandomSource, WeightedSampler
from northwind_seed.writer import BatchWriter

__version__ = "0.1.0"

__all__ = [
    "SeedOrchestrator",
    "PHASES",
    "BatchWriter",
    "RetryPolicy",
    "RandomSource",
    "WeightedSampler",
    "Bucket",
    "ReferenceRegistry",
    "EntityGenerator",
    "GenerationContext",
    "register_generator",
    "list_generators",
    "clear_generators",
    "SeedBackend",
    "DirectBackend",
    "HttpProxyBackend",
    "StagingBackend",
    "SizeProfile",
    "SeedSummary",
    "SIZE_PROFILES",
    "get_profile",
]
