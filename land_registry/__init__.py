"""Land-title registry: audited land records with a two-phase transfer workflow."""

__version__ = "0.1.0"
