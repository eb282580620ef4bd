"""Data models for land-registry."""

from land_registry.models.enums import DOC_TYPE_LAND, CurrentStatus, HistoryAction, LegalStatus
from land_registry.models.land import (
    Boundary,
    Coordinates,
    HistoryEntry,
    LandRecord,
    PendingTransfer,
    PreviousOwner,
)

__all__ = [
    "DOC_TYPE_LAND",
    "Boundary",
    "Coordinates",
    "CurrentStatus",
    "HistoryAction",
    "HistoryEntry",
    "LandRecord",
    "LegalStatus",
    "PendingTransfer",
    "PreviousOwner",
]
