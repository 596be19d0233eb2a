"""Faker-backed sample data generators."""

from estate_catalog.generators.base import CITIES, BaseGenerator
from estate_catalog.generators.property import PropertyGenerator
from estate_catalog.generators.provider import ProviderGenerator

__all__ = ["BaseGenerator", "CITIES", "PropertyGenerator", "ProviderGenerator"]
