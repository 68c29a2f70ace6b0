"""Base generator interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from northwind_seed.models import SizeProfile
from northwind_seed.registry import ReferenceRegistry
from northwind_seed.sampling import RandomSource


@dataclass
class GenerationContext:
    """
    Everything a generator may read while producing rows.

    Attributes:
        random: Random source for every draw in the run
        registry: Reference data produced by earlier phases
        profile: Target counts (FK ranges are 1..count of the parent table)
    """

    random: RandomSource
    registry: ReferenceRegistry
    profile: SizeProfile

    @property
    def fake(self):
        return self.random.fake


class EntityGenerator(ABC):
    """
    Base class for entity generators.

    A generator produces one row per call to ``generate``. The orchestrator
    drives a whole phase through ``iter_records``, which by default yields
    rows for ids 1..count.

    Example:
        >>> class RegionGenerator(EntityGenerator):
        ...     table = "regions"
        ...     def generate(self, record_id, context):
        ...         return {"id": record_id, "name": context.fake.state()}
        >>>
        >>> register_generator("regions", RegionGenerator)
    """

    table: str

    @abstractmethod
    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        """
        Generate one row.

        Args:
            record_id: Sequential id of the row (1-based)
            context: Random source, reference registry and size profile

        Returns:
            Row dict keyed by column name
        """
        pass

    def count(self, context: GenerationContext) -> int:
        """Number of rows in this phase."""
        count = context.profile.count_for(self.table)
        if count is None:
            raise ValueError(
                f"Size profile has no count for '{self.table}'. "
                f"Override count() or iter_records() in {type(self).__name__}."
            )
        return count

    def iter_records(self, context: GenerationContext) -> Iterator[dict[str, Any]]:
        """Yield every row of the phase in id order."""
        for record_id in range(1, self.count(context) + 1):
            yield self.generate(record_id, context)
