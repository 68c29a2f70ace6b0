"""Run-scoped reference data shared between entity generators."""

from decimal import Decimal

from northwind_seed.exceptions import RegistryPreconditionError
from northwind_seed.sampling import RandomSource


class ReferenceRegistry:
    """
    Lookup tables filled by earlier generators and read by later ones.

    Entries are append-only for the lifetime of one seeding run:
        - product prices: written by the products phase, read by order_details
        - company names: written by customers and suppliers, read by shippers
    """

    def __init__(self) -> None:
        self._product_prices: dict[int, Decimal] = {}
        self._company_names: list[str] = []

    def register_product_price(self, product_id: int, price: Decimal) -> None:
        self._product_prices[product_id] = price

    def product_price(self, product_id: int) -> Decimal:
        """
        Unit price captured when the product was generated.

        Raises:
            RegistryPreconditionError: If the product has not been generated
        """
        try:
            return self._product_prices[product_id]
        except KeyError:
            raise RegistryPreconditionError(
                f"product_price[{product_id}]", "order_details"
            ) from None

    def register_company_name(self, name: str) -> str:
        self._company_names.append(name)
        return name

    def pick_company_name(self, random_source: RandomSource) -> str:
        """
        Pick one previously generated company name uniformly.

        Raises:
            RegistryPreconditionError: If no company names exist yet
        """
        if not self._company_names:
            raise RegistryPreconditionError("company_names", "shippers")
        index = random_source.uniform_int(0, len(self._company_names) - 1)
        return self._company_names[index]

    @property
    def company_names(self) -> tuple[str, ...]:
        return tuple(self._company_names)

    @property
    def product_count(self) -> int:
        return len(self._product_prices)

    def clear(self) -> None:
        """Clear all entries (for testing)."""
        self._product_prices.clear()
        self._company_names.clear()
