"""Order and order-line generators."""

from collections.abc import Iterator
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.reference_data import (
    DISCOUNTS,
    MAX_LINE_QUANTITY,
    ORDER_LINE_BUCKETS,
)
from northwind_seed.schema import ORDER_DETAILS, ORDERS

# First order date; each following order is one minute later
ORDER_EPOCH = datetime(2016, 1, 1)
ORDER_STEP = timedelta(minutes=1)
REQUIRED_AFTER = timedelta(days=30)

# Shipped dates are drawn from this window, independently of the order cursor
SHIPPED_FROM = datetime(1996, 1, 1)
SHIPPED_TO = datetime(2023, 12, 31, 23, 59, 59)


def format_timestamp(value: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS.mmm``."""
    return f"{value:%Y-%m-%d %H:%M:%S}.{value.microsecond // 1000:03d}"


class OrderGenerator(EntityGenerator):
    """
    Orders with a monotonically advancing order date.

    The order date is an explicit cursor: ``generate_with_cursor`` takes the
    current date and returns the next one, and ``iter_records`` threads it
    through the phase starting at ORDER_EPOCH.
    """

    table = ORDERS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        order_date = ORDER_EPOCH + ORDER_STEP * (record_id - 1)
        row, _ = self.generate_with_cursor(record_id, context, order_date)
        return row

    def generate_with_cursor(
        self,
        order_id: int,
        context: GenerationContext,
        order_date: datetime,
    ) -> tuple[dict[str, Any], datetime]:
        """
        Generate one order at ``order_date``.

        Returns:
            (row, next order date)
        """
        fake = context.fake
        rand = context.random
        shipped = fake.date_time_between(start_date=SHIPPED_FROM, end_date=SHIPPED_TO)

        row = {
            "id": order_id,
            "order_date": format_timestamp(order_date),
            "required_date": format_timestamp(order_date + REQUIRED_AFTER),
            "shipped_date": format_timestamp(shipped),
            "ship_via": rand.uniform_int(1, 3),
            "freight": Decimal(f"{rand.uniform_int(0, 1000)}.{rand.uniform_int(10, 99)}"),
            "ship_name": fake.street_address(),
            "ship_city": fake.city(),
            "ship_region": fake.state(),
            "ship_postal_code": fake.postcode(),
            "ship_country": fake.country(),
            "customer_id": rand.uniform_int(1, context.profile.customers),
            "employee_id": rand.uniform_int(1, context.profile.employees),
        }
        return row, order_date + ORDER_STEP

    def iter_records(self, context: GenerationContext) -> Iterator[dict[str, Any]]:
        order_date = ORDER_EPOCH
        for order_id in range(1, self.count(context) + 1):
            row, order_date = self.generate_with_cursor(order_id, context, order_date)
            yield row


class OrderDetailGenerator(EntityGenerator):
    """
    Order lines: 1-25 per order, drawn from a long-tailed distribution.

    Unit prices come from the reference registry, so they match the price of
    the product as it was generated.
    """

    table = ORDER_DETAILS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        """Generate one line for order ``record_id``."""
        rand = context.random
        product_id = rand.uniform_int(1, context.profile.products)

        return {
            "unit_price": context.registry.product_price(product_id),
            "quantity": rand.uniform_int(1, MAX_LINE_QUANTITY),
            "discount": Decimal(0) if rand.chance() else rand.choice(DISCOUNTS),
            "order_id": record_id,
            "product_id": product_id,
        }

    def count(self, context: GenerationContext) -> int:
        """Number of orders to expand (line count is drawn per order)."""
        return context.profile.orders

    def iter_records(self, context: GenerationContext) -> Iterator[dict[str, Any]]:
        line_count = context.random.weighted_categorical(ORDER_LINE_BUCKETS)
        for order_id in range(1, self.count(context) + 1):
            for _ in range(line_count()):
                yield self.generate(order_id, context)
