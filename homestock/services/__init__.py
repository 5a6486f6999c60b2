from homestock.services.consolidation import can_merge, consume, merge, split
from homestock.services.image_store import ImageStore, OwnerKind
from homestock.services.repository import InventoryRepository
from homestock.services.statistics import low_stock_articles, monthly_statistics

__all__ = [
    "ImageStore",
    "InventoryRepository",
    "OwnerKind",
    "can_merge",
    "consume",
    "low_stock_articles",
    "merge",
    "monthly_statistics",
    "split",
]
