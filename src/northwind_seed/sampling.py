"""Random primitives: bounded integers, choices and weighted categorical draws.

Every draw in a seeding run goes through one ``RandomSource`` so that a run
started with an explicit seed is reproducible, Faker values included.
"""

import random
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from itertools import accumulate
from typing import Any, Generic, TypeVar

from faker import Faker

from northwind_seed.exceptions import InvalidRangeError, NoBucketMatchedError

T = TypeVar("T")


@dataclass(frozen=True)
class Bucket(Generic[T]):
    """
    One outcome of a weighted categorical draw.

    Attributes:
        weight: Relative probability mass (need not sum to 1 across buckets)
        value: A fixed value, or a collection (list, tuple, set, range, ...)
            to choose from uniformly. Strings and bytes are fixed values.
    """

    weight: float
    value: T | Collection[T]

    @property
    def is_pool(self) -> bool:
        return isinstance(self.value, Collection) and not isinstance(
            self.value, (str, bytes)
        )

    def candidates(self) -> Sequence[T]:
        """Pool members in a stable order (unordered collections are sorted)."""
        if isinstance(self.value, Sequence):
            return self.value
        return tuple(sorted(self.value))  # type: ignore[arg-type]


class RandomSource:
    """Seedable source of uniform and Faker-backed randomness."""

    def __init__(self, seed: int | None = None, locale: str = "en_US"):
        """
        Initialize random source.

        Args:
            seed: Seed for both the stdlib generator and Faker (None = unseeded)
            locale: Faker locale used for names, addresses and phones
        """
        self.seed = seed
        self._random = random.Random(seed)
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def uniform_int(self, low: int, high: int) -> int:
        """
        Draw an integer uniformly from the inclusive range [low, high].

        Raises:
            InvalidRangeError: If low > high
        """
        if low > high:
            raise InvalidRangeError(low, high)
        return self._random.randint(low, high)

    def uniform(self) -> float:
        """Draw a float uniformly from [0, 1)."""
        return self._random.random()

    def chance(self) -> bool:
        """Fair coin flip."""
        return self._random.random() < 0.5

    def choice(self, values: Sequence[T]) -> T:
        """
        Pick one element uniformly.

        Raises:
            InvalidRangeError: If values is empty
        """
        if not values:
            raise InvalidRangeError(0, -1)
        return values[self._random.randrange(len(values))]

    def weighted_categorical(self, buckets: Sequence[Bucket[T]]) -> "WeightedSampler[T]":
        """Build a sampler over buckets that draws from this source."""
        return WeightedSampler(buckets, self)


class WeightedSampler(Generic[T]):
    """
    Weighted categorical sampler using a cumulative distribution.

    The cumulative sums of the bucket weights are divided by the total
    weight. Entries from the last positive-weight bucket onward are pinned
    to 1.0. A uniform draw r in [0, 1) selects the first positive-weight
    bucket whose cumulative value is >= r, so every draw matches a bucket
    regardless of floating-point drift, and zero-weight buckets are never
    selected.

    Example:
        >>> sampler = WeightedSampler([
        ...     Bucket(0.6, [1, 2, 3, 4]),
        ...     Bucket(0.4, 10),
        ... ], RandomSource(seed=1))
        >>> sampler() in {1, 2, 3, 4, 10}
        True
    """

    def __init__(self, buckets: Sequence[Bucket[T]], random_source: RandomSource):
        """
        Build the CDF for a bucket list.

        Raises:
            NoBucketMatchedError: If no draw could ever select a bucket
        """
        if not buckets:
            raise NoBucketMatchedError("bucket list is empty")
        for bucket in buckets:
            if bucket.weight < 0:
                raise NoBucketMatchedError(f"negative weight {bucket.weight}")
            if bucket.is_pool and not bucket.value:
                raise NoBucketMatchedError("bucket value list is empty")

        total = sum(bucket.weight for bucket in buckets)
        if total <= 0:
            raise NoBucketMatchedError("total weight is zero")

        self.buckets = list(buckets)
        self.cdf = [running / total for running in accumulate(b.weight for b in buckets)]
        self._last_selectable = max(i for i, b in enumerate(self.buckets) if b.weight > 0)
        for i in range(self._last_selectable, len(self.cdf)):
            self.cdf[i] = 1.0
        self._pools = [b.candidates() if b.is_pool else None for b in self.buckets]
        self._random_source = random_source

    def bucket_index(self, r: float) -> int:
        """Index of the first positive-weight bucket whose cumulative value is >= r."""
        for i, cumulative in enumerate(self.cdf):
            if cumulative >= r and self.buckets[i].weight > 0:
                return i
        # cdf[_last_selectable] == 1.0 and r < 1.0
        return self._last_selectable

    def __call__(self) -> T:
        index = self.bucket_index(self._random_source.uniform())
        pool = self._pools[index]
        if pool is not None:
            return self._random_source.choice(pool)
        return self.buckets[index].value  # type: ignore[return-value]

    def sample(self, n: int) -> list[Any]:
        """Draw n values."""
        return [self() for _ in range(n)]
