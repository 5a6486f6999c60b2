from homestock.core.errors import (
    CorruptDataError,
    DanglingReferenceError,
    InvalidRecordError,
    InventoryError,
)
from homestock.schemas import Article, Assignment, InventoryData, Location

__all__ = [
    "Article",
    "Assignment",
    "CorruptDataError",
    "DanglingReferenceError",
    "InvalidRecordError",
    "InventoryData",
    "InventoryError",
    "Location",
]
