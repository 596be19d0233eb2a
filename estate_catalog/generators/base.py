"""Base generator class for sample data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker

CITIES: dict[str, tuple[str, ...]] = {
    "Nairobi": ("Westlands", "Kilimani", "Karen", "Lavington", "Runda", "Kileleshwa"),
    "Mombasa": ("Nyali", "Bamburi", "Shanzu", "Tudor", "Mtwapa"),
    "Kisumu": ("Milimani", "Riat Hills", "Tom Mboya", "Mamboleo"),
    "Nakuru": ("Milimani", "Section 58", "Lanet", "Naka"),
    "Eldoret": ("Elgon View", "Kapsoya", "Annex", "Pioneer"),
}


class BaseGenerator(ABC):
    """Base class for sample data generators.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)

    def pick_city(self) -> tuple[str, str]:
        """Return a (city, neighbourhood) pair."""
        city = self.random.choice(list(CITIES))
        return city, self.random.choice(CITIES[city])
