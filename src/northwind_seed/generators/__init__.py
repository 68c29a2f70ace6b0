"""Entity generators for the Northwind tables."""

from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.companies import (
    CustomerGenerator,
    ShipperGenerator,
    SupplierGenerator,
)
from northwind_seed.generators.employees import EmployeeGenerator
from northwind_seed.generators.orders import OrderDetailGenerator, OrderGenerator
from northwind_seed.generators.products import ProductGenerator

__all__ = [
    "EntityGenerator",
    "GenerationContext",
    "CustomerGenerator",
    "EmployeeGenerator",
    "OrderGenerator",
    "SupplierGenerator",
    "ProductGenerator",
    "OrderDetailGenerator",
    "ShipperGenerator",
]
