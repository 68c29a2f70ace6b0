"""Product generator."""

from decimal import Decimal
from typing import Any

from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.reference_data import (
    QUANTITY_PER_UNIT,
    REORDER_LEVELS,
    UNITS_ON_ORDER,
)
from northwind_seed.sampling import RandomSource
from northwind_seed.schema import PRODUCTS


def draw_unit_price(rand: RandomSource) -> Decimal:
    """
    Draw a unit price: a whole amount or one with a two-digit fraction.

    Both shapes are equally likely. The result never has more than two
    fractional digits.

    Examples:
        Decimal('17'), Decimal('212.05'), Decimal('3.99')
    """
    whole = rand.uniform_int(3, 300)
    if rand.chance():
        return Decimal(whole)
    return Decimal(f"{whole}.{rand.uniform_int(5, 99):02d}")


class ProductGenerator(EntityGenerator):
    """Products; each unit price is registered for the order_details phase."""

    table = PRODUCTS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        rand = context.random
        unit_price = draw_unit_price(rand)
        context.registry.register_product_price(record_id, unit_price)

        return {
            "id": record_id,
            "name": context.fake.company(),
            "qt_per_unit": rand.choice(QUANTITY_PER_UNIT),
            "unit_price": unit_price,
            "units_in_stock": rand.uniform_int(0, 125),
            "units_on_order": rand.choice(UNITS_ON_ORDER),
            "reorder_level": rand.choice(REORDER_LEVELS),
            "discontinued": rand.uniform_int(0, 1),
            "supplier_id": rand.uniform_int(1, context.profile.suppliers),
        }
