"""Synthetic data generators for land-registry."""

from land_registry.generators.land import LandParcelGenerator, ParcelRequest

__all__ = ["LandParcelGenerator", "ParcelRequest"]
