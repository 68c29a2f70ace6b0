"""Generators for company-like entities: customers, suppliers and shippers."""

from typing import Any

from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.schema import CUSTOMERS, SHIPPERS, SUPPLIERS


class CustomerGenerator(EntityGenerator):
    """Customers; every company name is recorded for the shippers phase."""

    table = CUSTOMERS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        fake = context.fake
        return {
            "id": record_id,
            "company_name": context.registry.register_company_name(fake.company()),
            "contact_name": fake.name(),
            "contact_title": fake.job(),
            "address": fake.street_address(),
            "city": fake.city(),
            "postal_code": fake.postcode() if context.random.chance() else None,
            "region": fake.state(),
            "country": fake.country(),
            "phone": fake.phone_number(),
            "fax": fake.phone_number(),
        }


class SupplierGenerator(EntityGenerator):
    table = SUPPLIERS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        fake = context.fake
        return {
            "id": record_id,
            "company_name": context.registry.register_company_name(fake.company()),
            "contact_name": fake.name(),
            "contact_title": fake.job(),
            "address": fake.street_address(),
            "city": fake.city(),
            "region": fake.state(),
            "postal_code": fake.postcode(),
            "country": fake.country(),
            "phone": fake.phone_number(),
        }


class ShipperGenerator(EntityGenerator):
    """
    Shippers reuse company names generated by earlier phases.

    Raises RegistryPreconditionError if no company name has been registered.
    """

    table = SHIPPERS

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        return {
            "id": record_id,
            "company_name": context.registry.pick_company_name(context.random),
            "phone": context.fake.phone_number(),
        }
