"""Enumeration types for land records."""

from enum import Enum

DOC_TYPE_LAND = "land"


class LegalStatus(str, Enum):
    REGISTERED = "REGISTERED"
    PENDING_TRANSFER = "PENDING_TRANSFER"


class CurrentStatus(str, Enum):
    OWNED = "OWNED"


class HistoryAction(str, Enum):
    CREATED = "CREATED"
    TRANSFER_INITIATED = "TRANSFER_INITIATED"
    TRANSFER_APPROVED = "TRANSFER_APPROVED"
