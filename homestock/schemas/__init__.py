from homestock.schemas.article import Article
from homestock.schemas.assignment import Assignment
from homestock.schemas.inventory import InventoryData
from homestock.schemas.location import Location

__all__ = ["Article", "Assignment", "InventoryData", "Location"]
