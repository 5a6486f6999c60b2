from typing import List

from pydantic import BaseModel, ConfigDict, Field

from homestock.schemas.article import Article
from homestock.schemas.assignment import Assignment
from homestock.schemas.location import Location


class InventoryData(BaseModel):
    """The whole inventory document: articles, locations and assignments."""

    model_config = ConfigDict(extra="ignore")

    articles: List[Article] = Field(default_factory=list)
    locations: List[Location] = Field(default_factory=list)
    assignments: List[Assignment] = Field(default_factory=list)

    @classmethod
    def from_json(cls, content: str) -> "InventoryData":
        return cls.model_validate_json(content)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def without_deleted(self) -> "InventoryData":
        return InventoryData(
            articles=[item for item in self.articles if not item.is_deleted],
            locations=[item for item in self.locations if not item.is_deleted],
            assignments=[item for item in self.assignments if not item.is_deleted],
        )

    def counts(self) -> dict:
        return {
            "articles": len(self.articles),
            "locations": len(self.locations),
            "assignments": len(self.assignments),
        }
