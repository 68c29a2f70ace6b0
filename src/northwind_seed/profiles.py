"""Named size profiles."""

from northwind_seed.exceptions import UnknownProfileError
from northwind_seed.models import SizeProfile

SIZE_PROFILES: dict[str, SizeProfile] = {
    "nano": SizeProfile(
        employees=50,
        customers=50,
        orders=500,
        products=500,
        suppliers=100,
        shippers=250,
    ),
    "micro": SizeProfile(
        employees=200,
        customers=10000,
        orders=50000,
        products=5000,
        suppliers=1000,
        shippers=3000,
    ),
}


def get_profile(name: str) -> SizeProfile:
    """
    Look up a size profile by name.

    Raises:
        UnknownProfileError: If no profile has that name
    """
    try:
        return SIZE_PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name, list(SIZE_PROFILES)) from None
