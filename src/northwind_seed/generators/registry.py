"""Generator registry mapping table names to entity generators."""

from northwind_seed.generators.base import EntityGenerator
from northwind_seed.generators.companies import (
    CustomerGenerator,
    ShipperGenerator,
    SupplierGenerator,
)
from northwind_seed.generators.employees import EmployeeGenerator
from northwind_seed.generators.orders import OrderDetailGenerator, OrderGenerator
from northwind_seed.generators.products import ProductGenerator

DEFAULT_GENERATORS: dict[str, type[EntityGenerator]] = {
    gen.table: gen
    for gen in (
        CustomerGenerator,
        EmployeeGenerator,
        OrderGenerator,
        SupplierGenerator,
        ProductGenerator,
        OrderDetailGenerator,
        ShipperGenerator,
    )
}


class GeneratorRegistry:
    """Registry of entity generators, pre-populated with the Northwind defaults."""

    def __init__(self):
        self._generators: dict[str, type[EntityGenerator]] = dict(DEFAULT_GENERATORS)

    def register(self, name: str, generator_class: type) -> None:
        """
        Register a generator for a table, replacing any existing one.

        Args:
            name: Table name the generator produces rows for
            generator_class: Generator class (must have generate method)

        Raises:
            ValueError: If generator class doesn't have generate method
        """
        if not hasattr(generator_class, "generate"):
            raise ValueError(
                f"Generator class must have 'generate' method. "
                f"Class {generator_class.__name__} is missing it."
            )
        self._generators[name] = generator_class

    def get(self, name: str) -> type[EntityGenerator] | None:
        """
        Get generator by table name.

        Returns:
            Generator class or None if not found
        """
        return self._generators.get(name)

    def list_generators(self) -> list[str]:
        return list(self._generators.keys())

    def clear(self) -> None:
        """Restore the default generators (for testing)."""
        self._generators = dict(DEFAULT_GENERATORS)


# Global registry instance
_registry = GeneratorRegistry()


def register_generator(name: str, generator_class: type) -> None:
    """
    Register a generator (user-facing API).

    Example:
        >>> from northwind_seed import register_generator
        >>> from northwind_seed.generators import ShipperGenerator
        >>>
        >>> class FixedPhoneShipper(ShipperGenerator):
        ...     def generate(self, record_id, context):
        ...         row = super().generate(record_id, context)
        ...         row["phone"] = "(503) 555-9831"
        ...         return row
        >>>
        >>> register_generator("shippers", FixedPhoneShipper)
    """
    _registry.register(name, generator_class)


def get_generator(name: str) -> type[EntityGenerator] | None:
    return _registry.get(name)


def list_generators() -> list[str]:
    return _registry.list_generators()


def clear_generators() -> None:
    """Restore the default generators (for testing)."""
    _registry.clear()
