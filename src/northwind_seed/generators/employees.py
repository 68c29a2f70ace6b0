"""Employee generator."""

from typing import Any

from northwind_seed.generators.base import EntityGenerator, GenerationContext
from northwind_seed.generators.reference_data import TITLES_OF_COURTESY
from northwind_seed.schema import EMPLOYEES


class EmployeeGenerator(EntityGenerator):
    """
    Employees with an optional self-referencing ``recipient_id``.

    The first employee reports to nobody. Every later employee reports, with
    probability 1/2, to an employee generated before it, so the reference
    always resolves within the rows already produced.
    """

    table = EMPLOYEES

    def generate(self, record_id: int, context: GenerationContext) -> dict[str, Any]:
        fake = context.fake
        rand = context.random

        recipient_id = None
        if record_id > 1 and rand.chance():
            recipient_id = rand.uniform_int(1, record_id - 1)

        return {
            "id": record_id,
            "last_name": fake.last_name(),
            "first_name": fake.first_name(),
            "title": fake.job(),
            "title_of_courtesy": rand.choice(TITLES_OF_COURTESY),
            "address": fake.street_address(),
            "city": fake.city(),
            "postal_code": fake.postcode(),
            "country": fake.country(),
            "home_phone": fake.phone_number(),
            "extension": rand.uniform_int(428, 5467),
            "notes": fake.sentence(nb_words=12),
            "recipient_id": recipient_id,
        }
