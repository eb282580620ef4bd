"""Land record store and its bootstrap data."""

from land_registry.store.bootstrap import default_bootstrap_records
from land_registry.store.records import RecordStore

__all__ = ["RecordStore", "default_bootstrap_records"]
