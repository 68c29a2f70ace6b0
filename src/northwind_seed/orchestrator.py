"""Seed generation orchestrator."""

import logging
import time

from northwind_seed.backends.base import SeedBackend
from northwind_seed.dependency import DependencyGraph
from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.registry import get_generator
from northwind_seed.migrations import apply_migrations
from northwind_seed.models import SeedSummary, SizeProfile
from northwind_seed.registry import ReferenceRegistry
from northwind_seed.retry import RetryPolicy
from northwind_seed.sampling import RandomSource
from northwind_seed.schema import (
    CUSTOMERS,
    EMPLOYEES,
    ORDER_DETAILS,
    ORDERS,
    PRODUCTS,
    SHIPPERS,
    SUPPLIERS,
    TABLES,
)
from northwind_seed.writer import DEFAULT_BATCH_SIZE, BatchWriter

logger = logging.getLogger(__name__)

# Fixed seeding order; every phase only reads ids and registry entries
# produced by phases before it
PHASES: tuple[str, ...] = (
    CUSTOMERS,
    EMPLOYEES,
    ORDERS,
    SUPPLIERS,
    PRODUCTS,
    ORDER_DETAILS,
    SHIPPERS,
)

# Dependencies through the reference registry rather than foreign keys
REGISTRY_DEPENDENCIES: dict[str, set[str]] = {
    ORDER_DETAILS: {PRODUCTS},
    SHIPPERS: {CUSTOMERS, SUPPLIERS},
}


class SeedOrchestrator:
    """
    Run every seeding phase in dependency order through a batched writer.

    A run is all-or-nothing from the caller's point of view: the first error
    propagates and the run stops. Rows flushed before the failure stay in the
    backend; there is no resume.
    """

    def __init__(
        self,
        backend: SeedBackend,
        profile: SizeProfile,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        random_source: RandomSource | None = None,
        retry_policy: RetryPolicy | None = None,
        migrations: list[str] | None = None,
        phases: tuple[str, ...] = PHASES,
    ):
        """
        Initialize orchestrator.

        Args:
            backend: Persistence backend
            profile: Target counts per table
            batch_size: Writer flush threshold
            random_source: Random source (a fresh unseeded one if omitted)
            retry_policy: Retry policy for transient backend failures
            migrations: DDL statements applied before seeding (None = skip)
            phases: Seeding order

        Raises:
            MissingDependencyError: If phases are not in dependency order
        """
        self.backend = backend
        self.profile = profile
        self.batch_size = batch_size
        self.random_source = random_source or RandomSource()
        self.retry_policy = retry_policy or RetryPolicy()
        self.migrations = migrations
        self.phases = phases

        graph = DependencyGraph.from_tables(list(TABLES.values()), REGISTRY_DEPENDENCIES)
        graph.validate_order(list(phases))

    def run(self) -> SeedSummary:
        """
        Apply migrations, then generate and write every phase.

        Returns:
            SeedSummary with rows and flushes per table

        Raises:
            MigrationFailedError: If migrations fail (nothing is seeded)
            BackendError: If a flush fails after retries
            NorthwindSeedError: On any generation error
        """
        started = time.monotonic()

        if self.migrations is not None:
            apply_migrations(self.backend, self.migrations, self.retry_policy)

        context = GenerationContext(
            random=self.random_source,
            registry=ReferenceRegistry(),
            profile=self.profile,
        )
        writer = BatchWriter(self.backend, self.batch_size, self.retry_policy)

        for table in self.phases:
            logger.info(f"seeding {table}...")
            generator = self._generator_for(table)
            for row in generator.iter_records(context):
                writer.add(table, row)
            # Children are inserted only after every parent row is persisted
            writer.flush(table)
            logger.info(f"seeded {writer.rows_written[table]} {table}")

        summary = SeedSummary(
            rows={table: writer.rows_written[table] for table in self.phases},
            flushes={table: writer.flush_count[table] for table in self.phases},
            elapsed=time.monotonic() - started,
        )
        logger.info(f"done! {summary.total_rows} rows in {summary.elapsed:.1f}s")
        return summary

    def _generator_for(self, table: str) -> EntityGenerator:
        generator_class = get_generator(table)
        if generator_class is None:
            raise ValueError(
                f"No generator registered for '{table}'. "
                f"Register one with register_generator()."
            )
        return generator_class()
